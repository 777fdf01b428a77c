"""Key-value storage on top of SQLite."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.exceptions import DatabaseError, StoreError
from ..core.types import utc_now_iso
from .database import Database


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for string key-value persistence."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        ...

    def put(self, key: str, value: str) -> None:
        """Insert or replace a value."""
        ...

    def delete(self, key: str) -> bool:
        """Remove a key; True if it existed."""
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """Stored keys starting with ``prefix``, sorted."""
        ...


class SQLiteKeyValueStore:
    """KeyValueStore backed by the ``kv`` table."""

    def __init__(self, db: Database):
        """Initialize with database connection.

        Args:
            db: Connected Database instance.
        """
        self.db = db

    def get(self, key: str) -> str | None:
        try:
            row = self.db.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except DatabaseError as e:
            raise StoreError(f"Failed to read {key}: {e}") from e
        return row["value"] if row else None

    def put(self, key: str, value: str) -> None:
        try:
            with self.db.transaction() as cursor:
                cursor.execute(
                    """
                    INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, utc_now_iso()),
                )
        except DatabaseError as e:
            raise StoreError(f"Failed to write {key}: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            with self.db.transaction() as cursor:
                cursor.execute("DELETE FROM kv WHERE key = ?", (key,))
                return cursor.rowcount > 0
        except DatabaseError as e:
            raise StoreError(f"Failed to delete {key}: {e}") from e

    def keys(self, prefix: str = "") -> list[str]:
        pattern = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
        try:
            rows = self.db.execute(
                "SELECT key FROM kv WHERE key LIKE ? ESCAPE '\\' ORDER BY key",
                (pattern,),
            ).fetchall()
        except DatabaseError as e:
            raise StoreError(f"Failed to list keys: {e}") from e
        return [row["key"] for row in rows]
