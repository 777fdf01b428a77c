"""SQLite connection manager backing the snapshot store."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..core.exceptions import DatabaseError
from .schema import SCHEMA_VERSION, get_schema


class Database:
    """Owns the single SQLite connection that holds the ``kv`` table.

    Example:
        db = Database(config.db_path)
        db.connect()
        with db.transaction() as cursor:
            cursor.execute("DELETE FROM kv WHERE key = ?", ("models_openai",))
        db.close()
    """

    def __init__(self, path: Path):
        """Initialize database with path.

        Args:
            path: Path to the snapshot database file, or ``:memory:``.
        """
        self.path = path
        self._connection: sqlite3.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def schema_version(self) -> int:
        """Schema version recorded in the open database."""
        return self.execute("PRAGMA user_version").fetchone()[0]

    def connect(self) -> None:
        """Open the connection, creating the file and the ``kv`` table if needed.

        Raises:
            DatabaseError: If the file cannot be opened or the schema fails.
        """
        try:
            if str(self.path) != ":memory:":
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.path))
            self._connection.row_factory = sqlite3.Row
            self._connection.executescript(get_schema())
            self._connection.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        except (OSError, sqlite3.Error) as e:
            self.close()
            raise DatabaseError(f"Failed to open snapshot database {self.path}: {e}") from e

    def close(self) -> None:
        """Close the connection; a no-op when already closed."""
        if self._connection is None:
            return
        try:
            self._connection.close()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to close snapshot database: {e}") from e
        finally:
            self._connection = None

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise DatabaseError("Database not connected")
        return self._connection

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Cursor whose writes commit together or not at all.

        Raises:
            DatabaseError: If not connected, or if the block raises; the
                block's writes are rolled back first.
        """
        connection = self._require_connection()
        cursor = connection.cursor()
        try:
            yield cursor
            connection.commit()
        except Exception as e:
            connection.rollback()
            raise DatabaseError(f"Transaction failed: {e}") from e
        finally:
            cursor.close()

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Run one read statement outside a transaction.

        Raises:
            DatabaseError: If not connected or the statement fails.
        """
        connection = self._require_connection()
        try:
            return connection.execute(sql, params)
        except sqlite3.Error as e:
            raise DatabaseError(f"Query execution failed: {e}") from e
