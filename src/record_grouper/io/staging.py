"""Row-oriented staging stores for raw input lines.

Lines are inserted in input order and scanned back in the same order.
``SqliteRecordStore`` keeps them in a ``records`` table, in memory by default
or in a database file when a path is given.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path
import sqlite3
from typing import Protocol

STAGING_KINDS = ("memory", "sqlite")


class RecordStore(Protocol):
    """Insert/scan interface shared by all staging stores."""

    def insert_many(self, lines: Iterable[str]) -> int: ...

    def scan(self) -> Iterator[str]: ...

    def count(self) -> int: ...

    def close(self) -> None: ...


class InMemoryRecordStore:
    """Staging store backed by a Python list."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def insert_many(self, lines: Iterable[str]) -> int:
        before = len(self._lines)
        self._lines.extend(lines)
        return len(self._lines) - before

    def scan(self) -> Iterator[str]:
        return iter(self._lines)

    def count(self) -> int:
        return len(self._lines)

    def close(self) -> None:
        self._lines = []

    def __enter__(self) -> "InMemoryRecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SqliteRecordStore:
    """Staging store backed by a SQLite table."""

    BATCH_SIZE = 10000

    def __init__(self, database: Path | str = ":memory:", reset: bool = True) -> None:
        """Open the database and create the records table.

        Args:
            database: SQLite database path, or ":memory:" for a private in-memory database
            reset: Drop rows left by a previous load; False reopens them for scanning
        """
        self.database = str(database)
        self._conn = sqlite3.connect(self.database)
        if reset:
            self._conn.execute("DROP TABLE IF EXISTS records")
        self._conn.execute(
            "CREATE TABLE IF NOT EXISTS records "
            "(id INTEGER PRIMARY KEY AUTOINCREMENT, data TEXT NOT NULL)"
        )
        self._conn.commit()

    def insert_many(self, lines: Iterable[str]) -> int:
        inserted = 0
        batch: list[tuple[str]] = []
        for line in lines:
            batch.append((line,))
            if len(batch) >= self.BATCH_SIZE:
                inserted += self._flush(batch)
                batch = []
        if batch:
            inserted += self._flush(batch)
        self._conn.commit()
        return inserted

    def _flush(self, batch: list[tuple[str]]) -> int:
        self._conn.executemany("INSERT INTO records (data) VALUES (?)", batch)
        return len(batch)

    def scan(self) -> Iterator[str]:
        cursor = self._conn.execute("SELECT data FROM records ORDER BY id")
        for (data,) in cursor:
            yield data

    def count(self) -> int:
        (total,) = self._conn.execute("SELECT COUNT(*) FROM records").fetchone()
        return total

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "SqliteRecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_store(
    kind: str = "memory", path: Path | None = None
) -> InMemoryRecordStore | SqliteRecordStore:
    """Create a staging store by kind.

    Args:
        kind: "memory" or "sqlite"
        path: Database file for the sqlite store; in-memory database if None

    Raises:
        ValueError: If kind is unknown
    """
    if kind == "memory":
        return InMemoryRecordStore()
    if kind == "sqlite":
        return SqliteRecordStore(path if path is not None else ":memory:")
    raise ValueError(f"Unknown staging store '{kind}', expected one of {STAGING_KINDS}")
