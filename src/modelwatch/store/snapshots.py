"""Per-source snapshot persistence.

Snapshots live in a key-value store under ``models_<source_id>`` as JSON
in the shape ``{success, provider, models, count, timestamp}``. Only
successful snapshots are ever written.
"""

from __future__ import annotations

import json
from typing import Iterable

from loguru import logger

from ..core.exceptions import StoreError
from ..core.types import Snapshot
from .kv import KeyValueStore

KEY_PREFIX = "models_"


def snapshot_key(source_id: str) -> str:
    """Storage key for a source's snapshot."""
    return f"{KEY_PREFIX}{source_id}"


class SnapshotStore:
    """Reads and writes source snapshots.

    Example:
        store = SnapshotStore(SQLiteKeyValueStore(db))
        prior = store.get("openai")
        store.put("openai", Snapshot.from_fetch(result))
    """

    def __init__(self, kv: KeyValueStore):
        """Initialize with a key-value backend.

        Args:
            kv: Where serialized snapshots are kept.
        """
        self._kv = kv

    def get(self, source_id: str) -> Snapshot | None:
        """Last persisted snapshot of a source, or None if never stored.

        Raises:
            StoreError: If the backend fails or the stored value is corrupt.
        """
        raw = self._kv.get(snapshot_key(source_id))
        if raw is None:
            return None
        try:
            return Snapshot.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Corrupt snapshot for {source_id}: {e}") from e

    def put(self, source_id: str, snapshot: Snapshot) -> None:
        """Persist a successful snapshot.

        Raises:
            StoreError: If the snapshot is a failure or the write fails.
        """
        if not snapshot.success:
            raise StoreError(f"Refusing to persist failed snapshot for {source_id}")
        self._kv.put(snapshot_key(source_id), json.dumps(snapshot.to_dict(), ensure_ascii=False))
        logger.debug(f"Saved snapshot for {source_id} ({snapshot.count} models)")

    def delete(self, source_id: str) -> bool:
        """Remove a source's snapshot; True if one existed."""
        return self._kv.delete(snapshot_key(source_id))

    def clear(self, source_ids: Iterable[str]) -> int:
        """Remove the snapshots of the given sources.

        Returns:
            Number of snapshots that existed and were removed.
        """
        removed = sum(1 for source_id in source_ids if self.delete(source_id))
        logger.info(f"Cleared {removed} snapshots")
        return removed

    def stored_source_ids(self) -> list[str]:
        """Ids of all sources with a stored snapshot."""
        return [key[len(KEY_PREFIX):] for key in self._kv.keys(KEY_PREFIX)]
