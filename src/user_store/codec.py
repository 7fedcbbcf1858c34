"""Line codec for the tab-separated user store file.

Three layouts are accepted on read, all tab-separated::

    id  name  email  age                      (oldest)
    id  name  email  age  salary              (legacy)
    id  name  email  age  salary  gender      (current)

Writes always use the current six-field layout.  Parsing never raises: a
line that cannot be read is reported as ``None`` and the caller moves on.
"""

from __future__ import annotations

import logging
import math
import re

from user_store.schemas.user import UserRecord

logger = logging.getLogger(__name__)

HEADER_PREFIX = "#nextId="
COMMENT_MARKER = "#"
SEPARATOR = "\t"
MIN_FIELDS = 4

# Culture-invariant numbers: ASCII digits, optional sign, "." as decimal point.
_INT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
# Characters that would split a field or a record when written.
_BREAK_RE = re.compile(r"[\t\r\n]")


def parse_int(text: str) -> int | None:
    """Return *text* as an int, or ``None`` if it is not a plain integer."""
    text = text.strip()
    if not _INT_RE.match(text):
        return None
    return int(text)


def parse_float(text: str, default: float = 0.0) -> float:
    """Return *text* as a float, or *default* when it is not a plain decimal."""
    text = text.strip()
    if not _FLOAT_RE.match(text):
        return default
    value = float(text)
    # Large exponents overflow to inf.
    return value if math.isfinite(value) else default


def clean_text(value: str | None) -> str:
    """Replace tabs and line breaks with spaces and trim.

    A cleaned value can never split a field or a line.
    """
    return _BREAK_RE.sub(" ", value or "").strip()


def parse_header(line: str) -> int | None:
    """Return N for a ``#nextId=N`` line, ``None`` for anything else."""
    if line[: len(HEADER_PREFIX)].lower() != HEADER_PREFIX.lower():
        return None
    return parse_int(line[len(HEADER_PREFIX):])


def parse_line(line: str) -> UserRecord | None:
    """Parse one record line.

    Returns ``None`` for blank lines, comments (including the header) and
    malformed lines.  Name and email are kept exactly as written; only the
    numeric fields decide whether a line is usable.
    """
    line = line.rstrip("\r\n")
    if not line.strip() or line.startswith(COMMENT_MARKER):
        return None

    fields = line.split(SEPARATOR)
    if len(fields) < MIN_FIELDS:
        logger.debug("Skipping line with %d field(s): %r", len(fields), line)
        return None

    record_id = parse_int(fields[0])
    if record_id is None or record_id < 1:
        logger.debug("Skipping line with invalid id %r", fields[0])
        return None

    age = parse_int(fields[3])
    if age is None:
        logger.debug("Skipping id %d: invalid age %r", record_id, fields[3])
        return None

    salary = 0.0
    gender = ""
    if len(fields) >= 6:
        salary = parse_float(fields[4])
        gender = fields[5].strip().upper()
    elif len(fields) == 5:
        salary = parse_float(fields[4])

    return UserRecord(
        id=record_id,
        name=fields[1],
        email=fields[2],
        age=age,
        salary=salary,
        gender=gender,
    )


def format_header(next_id: int) -> str:
    return f"{HEADER_PREFIX}{next_id}"


def serialize(record: UserRecord) -> str:
    """Render *record* as a six-field line (no trailing newline)."""
    return SEPARATOR.join(
        [
            str(record.id),
            clean_text(record.name),
            clean_text(record.email),
            str(record.age),
            f"{record.salary:.2f}",
            clean_text(record.gender),
        ]
    )
