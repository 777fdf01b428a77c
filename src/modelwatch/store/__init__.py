"""Persistence layer for modelwatch."""

from .database import Database
from .kv import KeyValueStore, SQLiteKeyValueStore
from .snapshots import KEY_PREFIX, SnapshotStore, snapshot_key

__all__ = [
    "Database",
    "KeyValueStore",
    "SQLiteKeyValueStore",
    "SnapshotStore",
    "KEY_PREFIX",
    "snapshot_key",
]
