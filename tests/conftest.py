"""Shared fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from user_store.repository import UserRepository


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    """Path for a user file that does not exist yet."""
    return tmp_path / "usuarios.txt"


@pytest.fixture()
def repo(store_path: Path) -> UserRepository:
    """Empty repository backed by *store_path*."""
    return UserRepository(store_path)


@pytest.fixture()
def mixed_format_file(tmp_path: Path) -> Path:
    """A file with a header, every historical layout, and junk lines."""
    path = tmp_path / "mixed.txt"
    path.write_text(
        "#nextId=4\n"
        "1\tAlice\talice@example.com\t30\n"
        "2\tBob\tbob@example.com\t41\t2500.5\n"
        "3\tCarol\tcarol@example.com\t25\t1800.75\tf\n"
        "\n"
        "# a comment\n"
        "9\tonly-two\n"
        "x\tBad\tbad@example.com\t20\t10\tM\n"
        "5\tBadAge\tbadage@example.com\tabc\t10\tM\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def populated_repo(store_path: Path) -> UserRepository:
    """Repository with three valid users."""
    repo = UserRepository(store_path)
    repo.add("Ana", "ana@x.co", 30, 1000.50, "f")
    repo.add("Luis", "luis@x.co", 45, 2000.0, "M")
    repo.add("Eva", "eva@x.co", 27, 1500.25, "F")
    return repo
