"""Aggregate statistics over a snapshot of user records.

Pure and read-only: takes the list returned by
:meth:`UserRepository.list_users` and never touches the repository.
"""

from __future__ import annotations

import logging
from typing import Iterable

import pandas as pd
from pydantic import BaseModel

from user_store.schemas.user import UserRecord

logger = logging.getLogger(__name__)

COLUMNS = ["id", "name", "email", "age", "salary", "gender"]


class UserStats(BaseModel):
    total: int = 0
    average_age: float | None = None
    average_salary: float | None = None
    male: int = 0
    female: int = 0
    unspecified: int = 0


def to_frame(records: Iterable[UserRecord]) -> pd.DataFrame:
    """Build a DataFrame with one row per record, columns in file order."""
    rows = [record.model_dump() for record in records]
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(records: Iterable[UserRecord]) -> UserStats:
    """Count users, average age and salary, and count by gender.

    Averages are ``None`` when there are no records.  Gender codes other
    than M, F or blank only show up in ``total``.
    """
    df = to_frame(records)
    if df.empty:
        return UserStats()

    gender = df["gender"].fillna("").astype(str).str.strip()
    stats = UserStats(
        total=len(df),
        average_age=float(df["age"].astype(float).mean()),
        average_salary=float(df["salary"].astype(float).mean()),
        male=int((gender == "M").sum()),
        female=int((gender == "F").sum()),
        unspecified=int((gender == "").sum()),
    )
    logger.debug("Summarized %d user(s): %s", stats.total, stats)
    return stats
