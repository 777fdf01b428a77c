"""Test fakes for testing without real infrastructure.

This module provides in-memory implementations of:
- Key-value storage (for testing snapshots without SQLite)
- Catalog fetching (for testing the orchestrator without HTTP)
- Notification sinks and sleep callables that record what they receive

Example:
    from tests.fakes import InMemoryKeyValueStore, RecordingNotifier, ScriptedFetcher

    fetcher = ScriptedFetcher()
    fetcher.set_models("openai", ["gpt-4o", "gpt-4o-mini"])

    orchestrator = MonitorOrchestrator(
        registry=registry,
        resolver=resolver,
        fetcher=fetcher,
        store=SnapshotStore(InMemoryKeyValueStore()),
        notifier=RecordingNotifier(),
        sleep=RecordingSleeper(),
    )
"""

from .fetch import ScriptedFetcher, make_fetch_success, make_source
from .notify import RecordingNotifier
from .sleep import RecordingSleeper
from .store import FailingKeyValueStore, InMemoryKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "FailingKeyValueStore",
    "ScriptedFetcher",
    "RecordingNotifier",
    "RecordingSleeper",
    "make_source",
    "make_fetch_success",
]
