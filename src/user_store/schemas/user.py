"""Pydantic models for user records.

``UserRecord`` is what the repository stores and hands out.  It only checks
types so that legacy rows with odd emails or blank genders still load.
``UserInput`` applies the full field rules and is built by callers (menu,
CLI) before anything reaches the repository.  ``UserPatch`` applies the same
rules to just the fields a partial update supplies.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

GENDER_CODES = ("M", "F")

_BREAK_RE = re.compile(r"[\t\r\n]")


def is_valid_email(value: str) -> bool:
    """Minimal shape check: ``local@domain.tld`` without any whitespace."""
    if not value or not value.strip():
        return False
    at = value.find("@")
    dot = value.rfind(".")
    return (
        at > 0
        and dot > at + 1
        and dot < len(value) - 1
        and not any(c.isspace() for c in value)
    )


def normalize_gender(value: str) -> str:
    """Return the upper-cased gender code, or raise ``ValueError``."""
    code = (value or "").strip().upper()
    if code not in GENDER_CODES:
        raise ValueError(f"gender must be one of {', '.join(GENDER_CODES)}, got {value!r}")
    return code


class UserRecord(BaseModel):
    """A stored user.  Frozen, so snapshots cannot leak mutations."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    name: str = ""
    email: str = ""
    age: int = 0
    salary: float = 0.0
    gender: str = ""

    @field_validator("salary")
    @classmethod
    def _two_decimals(cls, v: float) -> float:
        return round(v, 2)


class _UserFieldRules(BaseModel):
    """Field rules shared by full input and partial updates."""

    @field_validator("name", check_fields=False)
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        v = _BREAK_RE.sub(" ", v).strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("email", check_fields=False)
    @classmethod
    def email_must_have_basic_shape(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_email(v):
            raise ValueError(f"invalid email address: {v!r}")
        return v

    @field_validator("gender", check_fields=False)
    @classmethod
    def gender_must_be_known_code(cls, v: str) -> str:
        return normalize_gender(v)


class UserInput(_UserFieldRules):
    """Caller-supplied fields for add/update, validated before storage."""

    name: str
    email: str
    age: int = Field(..., ge=0, le=120)
    salary: float = Field(0.0, ge=0, allow_inf_nan=False)
    gender: str


class UserPatch(_UserFieldRules):
    """Some fields of an existing user; only the ones given are checked.

    Build it from the supplied values only and apply
    ``model_dump(exclude_unset=True)`` over the stored record.
    """

    name: str | None = None
    email: str | None = None
    age: int | None = Field(None, ge=0, le=120)
    salary: float | None = Field(None, ge=0, allow_inf_nan=False)
    gender: str | None = None
