"""Plain-text table and report rendering for the console."""

from __future__ import annotations

from typing import Sequence

from user_store.schemas.user import UserRecord
from user_store.stats import UserStats

ELLIPSIS = "…"


def pad(value: str | None, width: int) -> str:
    """Left-align *value* in *width* columns, cutting it with an ellipsis."""
    value = value or ""
    if len(value) > width:
        return value[: width - 1] + ELLIPSIS
    return value.ljust(width)


def format_table(records: Sequence[UserRecord], email_width: int = 30) -> str:
    widths = [5, 20, email_width, 4, 6, 10]
    header = ["Id", "Name", "Email", "Age", "Gender", "Salary"]

    lines = [" ".join(pad(h, w) for h, w in zip(header, widths))]
    lines.append("-" * (sum(widths) + len(widths) - 1))
    for record in records:
        cells = [
            str(record.id),
            record.name,
            record.email,
            str(record.age),
            record.gender.upper(),
            f"{record.salary:.2f}",
        ]
        lines.append(" ".join(pad(c, w) for c, w in zip(cells, widths)))
    return "\n".join(lines)


def format_stats(stats: UserStats) -> str:
    if stats.total == 0:
        return "No records saved."
    return "\n".join(
        [
            "===== STATISTICS =====",
            f" Total users:    {stats.total}",
            f" Average age:    {stats.average_age:.2f}",
            f" Average salary: {stats.average_salary:.2f}",
            f" Men (M):        {stats.male}",
            f" Women (F):      {stats.female}",
            f" Unspecified:    {stats.unspecified}",
        ]
    )
