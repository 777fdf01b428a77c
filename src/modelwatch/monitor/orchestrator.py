"""Monitoring cycle orchestration.

One cycle polls every configured source. Sources are split into fixed-size
batches; the sources of a batch are reconciled concurrently and batches
run one after another with a pause in between. Each reconciliation is

    fetch -> (failure: notify, stop) -> load prior snapshot -> diff
          -> (first time or changed: notify, persist)

and its outcome is final: a failing source never affects its siblings.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol, Sequence, TypeVar

from loguru import logger

from ..core.config import MonitorConfig
from ..core.types import (
    CyclePhase,
    CycleResult,
    FetchFailure,
    FetchResult,
    Snapshot,
    SourceDescriptor,
    SourceOutcome,
    utc_now_iso,
)
from ..notify.base import Notifier
from ..sources.credentials import CredentialResolver
from ..sources.registry import SourceRegistry
from ..store.snapshots import SnapshotStore
from .diff import compare

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class CatalogFetcher(Protocol):
    """Anything that can fetch a source's catalog without raising."""

    async def fetch(self, source: SourceDescriptor) -> FetchResult: ...


def create_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split items into consecutive batches, preserving order.

    Raises:
        ValueError: If batch_size is not positive.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]


class MonitorOrchestrator:
    """Runs monitoring cycles over a source registry.

    Example:
        orchestrator = MonitorOrchestrator(
            registry=SourceRegistry.default(),
            resolver=CredentialResolver(),
            fetcher=fetcher,
            store=SnapshotStore(SQLiteKeyValueStore(db)),
            notifier=TelegramNotifier(config.telegram),
            config=config.monitor,
        )
        result = await orchestrator.run()
        print(result.summary())
    """

    def __init__(
        self,
        registry: SourceRegistry,
        resolver: CredentialResolver,
        fetcher: CatalogFetcher,
        store: SnapshotStore,
        notifier: Notifier,
        config: MonitorConfig | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize orchestrator.

        Args:
            registry: Sources to poll, in order.
            resolver: Decides which sources have their secrets.
            fetcher: Fetches one source's catalog.
            store: Snapshot persistence.
            notifier: Receives change and failure notifications.
            config: Batch size and inter-batch delay.
            sleep: Awaitable used for the inter-batch delay.
        """
        self._registry = registry
        self._resolver = resolver
        self._fetcher = fetcher
        self._store = store
        self._notifier = notifier
        self._config = config or MonitorConfig()
        self._sleep = sleep
        self._phase = CyclePhase.IDLE
        self._last_result: CycleResult | None = None

    @property
    def phase(self) -> CyclePhase:
        return self._phase

    @property
    def last_result(self) -> CycleResult | None:
        return self._last_result

    def configured_sources(self) -> list[SourceDescriptor]:
        """Registry sources whose secrets are all present, in registry order."""
        configured = []
        for source in self._registry:
            missing = self._resolver.missing_secret_names(source)
            if missing:
                logger.debug(f"Skipping {source.name}, missing {sorted(missing)}")
                continue
            configured.append(source)
        return configured

    async def run(self) -> CycleResult:
        """Run one full cycle over all configured sources.

        Returns:
            CycleResult with one outcome per configured source, in
            registry order.

        Raises:
            ValueError: If the configured batch size is not positive.
        """
        self._phase = CyclePhase.RUNNING
        result = CycleResult(started_at=utc_now_iso())
        sources = self.configured_sources()
        logger.info(f"Starting models monitoring ({len(sources)} sources)")

        try:
            batches = create_batches(sources, self._config.batch_size)
            for index, batch in enumerate(batches):
                outcomes = await asyncio.gather(*(self._reconcile_guarded(s) for s in batch))
                result.outcomes.extend(outcomes)
                if index < len(batches) - 1:
                    await self._sleep(self._config.batch_delay)
        finally:
            result.finished_at = utc_now_iso()
            self._last_result = result
            self._phase = CyclePhase.COMPLETED

        logger.info(
            f"Models monitoring completed: total={result.total}, "
            f"successful={result.successful}, changed={result.changed}"
        )
        return result

    async def reconcile(self, source: SourceDescriptor) -> SourceOutcome:
        """Fetch one source, diff against its snapshot, notify and persist.

        A failed fetch is reported and leaves the stored snapshot alone.
        An unchanged catalog causes neither a notification nor a write.

        Raises:
            StoreError: If the snapshot cannot be read or written.
        """
        logger.info(f"Processing {source.name}")
        result = await self._fetcher.fetch(source)

        if isinstance(result, FetchFailure):
            await self._notifier.notify_failure(source, result)
            return SourceOutcome.from_failure(result)

        prior = self._store.get(source.id)
        changes = compare(prior, result)

        if changes.should_notify:
            await self._notifier.notify_change(source, changes, result)
            self._store.put(source.id, Snapshot.from_fetch(result))
            if changes.is_first_observation:
                logger.info(f"First observation of {source.name}: {result.count} models")
            else:
                logger.info(
                    f"{source.name} changed: +{len(changes.added)} -{len(changes.removed)}"
                )

        return SourceOutcome(
            source_id=source.id,
            success=True,
            timestamp=result.timestamp,
            resources=result.resources,
            changes=changes,
        )

    async def _reconcile_guarded(self, source: SourceDescriptor) -> SourceOutcome:
        """Reconcile one source, turning any error into a failure outcome."""
        try:
            return await self.reconcile(source)
        except Exception as e:
            logger.exception(f"Error processing {source.name}")
            return SourceOutcome(
                source_id=source.id,
                success=False,
                timestamp=utc_now_iso(),
                error=str(e) or type(e).__name__,
            )

    def clear(self) -> int:
        """Delete the stored snapshot of every registered source.

        Returns:
            Number of snapshots removed.
        """
        return self._store.clear(self._registry.ids())
