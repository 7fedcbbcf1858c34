"""File-backed user repository.

Owns the record set, the next-id counter and one backing text file.  Every
mutating call rewrites the whole file before returning, using
write-to-temp-then-rename so a later load never sees a half-written file.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from user_store import codec
from user_store.schemas.user import UserRecord

logger = logging.getLogger(__name__)


class UserRepository:
    """CRUD over a tab-separated user file.

    The file is read once, at construction.  Callers get frozen
    :class:`UserRecord` instances; the repository never hands out its
    internal mapping.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._records: dict[int, UserRecord] = {}
        self._next_id = 1
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        """The id the next :meth:`add` will assign."""
        return self._next_id

    def __len__(self) -> int:
        return len(self._records)

    def list_users(self) -> list[UserRecord]:
        """Return all records sorted by id, as a new list."""
        return [self._records[key] for key in sorted(self._records)]

    def get(self, record_id: int) -> UserRecord | None:
        return self._records.get(record_id)

    def add(
        self,
        name: str,
        email: str,
        age: int,
        salary: float,
        gender: str,
    ) -> UserRecord:
        """Store a new record under the next id and persist.

        Fields are expected to be validated already (see
        :class:`~user_store.schemas.user.UserInput`); only text
        normalization happens here.
        """
        record = self._build(self._next_id, name, email, age, salary, gender)
        self._next_id += 1
        self._records[record.id] = record
        self._save()
        logger.info("Added user %d", record.id)
        return record

    def update(
        self,
        record_id: int,
        name: str,
        email: str,
        age: int,
        salary: float,
        gender: str,
    ) -> bool:
        """Replace every field of *record_id*.  ``False`` if it does not exist."""
        if record_id not in self._records:
            return False
        self._records[record_id] = self._build(record_id, name, email, age, salary, gender)
        self._save()
        logger.info("Updated user %d", record_id)
        return True

    def delete(self, record_id: int) -> bool:
        """Remove *record_id*.  ``False`` if it does not exist."""
        if self._records.pop(record_id, None) is None:
            return False
        self._save()
        logger.info("Deleted user %d", record_id)
        return True

    def clear(self) -> None:
        """Drop every record and restart ids at 1.  Not reversible."""
        removed = len(self._records)
        self._records.clear()
        self._next_id = 1
        self._save()
        logger.info("Cleared %d user(s) from %s", removed, self._path)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _build(
        record_id: int,
        name: str,
        email: str,
        age: int,
        salary: float,
        gender: str,
    ) -> UserRecord:
        return UserRecord(
            id=record_id,
            name=codec.clean_text(name),
            email=codec.clean_text(email),
            age=age,
            salary=salary,
            gender=codec.clean_text(gender).upper(),
        )

    def _load(self) -> None:
        if not self._path.exists():
            logger.info("No user file at %s, starting empty", self._path)
            return

        skipped = 0
        # utf-8-sig: files saved by other editors may start with a BOM.
        # Undecodable bytes become U+FFFD instead of aborting the load.
        with self._path.open("r", encoding="utf-8-sig", errors="replace") as fh:
            for line in fh:
                header = codec.parse_header(line.rstrip("\r\n"))
                if header is not None:
                    self._next_id = max(1, header)
                    continue

                record = codec.parse_line(line)
                if record is None:
                    if line.strip() and not line.startswith(codec.COMMENT_MARKER):
                        skipped += 1
                    continue

                if record.id in self._records:
                    logger.warning(
                        "Duplicate id %d in %s, keeping the later line", record.id, self._path
                    )
                self._records[record.id] = record

        if self._records:
            self._next_id = max(self._next_id, max(self._records) + 1)

        logger.info(
            "Loaded %d user(s) from %s (next id %d, %d malformed line(s) skipped)",
            len(self._records),
            self._path,
            self._next_id,
            skipped,
        )

    def _save(self) -> None:
        """Rewrite the backing file atomically (temp file, then rename)."""
        lines = [codec.format_header(self._next_id)]
        lines.extend(codec.serialize(record) for record in self.list_users())
        payload = "\n".join(lines) + "\n"

        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with open(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(payload)
            Path(tmp_path).replace(self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.debug("Saved %d user(s) to %s", len(self._records), self._path)
