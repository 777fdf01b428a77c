"""Service container for dependency injection and lifecycle management."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.config import Config
from ..monitor.orchestrator import MonitorOrchestrator
from ..notify.base import Notifier
from ..notify.telegram import TelegramNotifier
from ..sources.credentials import CredentialProvider, CredentialResolver
from ..sources.http import ModelFetcher
from ..sources.registry import SourceRegistry, load_registry
from ..store.database import Database
from ..store.kv import SQLiteKeyValueStore
from ..store.snapshots import SnapshotStore

if TYPE_CHECKING:
    from .status import StatusService


class ServiceContainer:
    """Builds and owns the components of one modelwatch process.

    Components are created lazily on first access. The database is opened
    by ``connect()`` (or ``async with``) and HTTP clients are closed by
    ``close()``.

    Usage as context manager (recommended):

        async with ServiceContainer(config) as services:
            result = await services.orchestrator.run()
            status = services.status.get_status()

    Any component can be replaced for testing:

        services = ServiceContainer(
            config,
            registry=SourceRegistry([source]),
            credentials=StaticCredentials({"API_KEY": "x"}),
            notifier=NullNotifier(),
        )

    Attributes:
        config: Application configuration.
        db: Database instance (connected after connect() or __aenter__).
    """

    def __init__(
        self,
        config: Config,
        *,
        registry: SourceRegistry | None = None,
        credentials: CredentialProvider | None = None,
        notifier: Notifier | None = None,
        fetcher: ModelFetcher | None = None,
    ):
        """Initialize container with configuration.

        Args:
            config: Application configuration.
            registry: Sources to poll; loaded from config when omitted.
            credentials: Secret provider; the environment when omitted.
            notifier: Notification sink; Telegram when omitted.
            fetcher: Catalog fetcher; built from config when omitted.
        """
        self.config = config
        self.db = Database(config.db_path)
        self._connected = False

        self._registry = registry
        self._resolver = CredentialResolver(credentials)
        self._notifier = notifier
        self._fetcher = fetcher

        self._store: SnapshotStore | None = None
        self._orchestrator: MonitorOrchestrator | None = None
        self._status: StatusService | None = None

    def connect(self) -> None:
        """Connect to database.

        Must be called before accessing the store unless using the async
        context manager.
        """
        if not self._connected:
            self.db.connect()
            self._connected = True
            logger.debug(f"ServiceContainer connected to {self.config.db_path}")

    async def close(self) -> None:
        """Close HTTP clients and the database."""
        if self._fetcher is not None:
            await self._fetcher.aclose()
        if isinstance(self._notifier, TelegramNotifier):
            await self._notifier.aclose()
        if self._connected:
            self.db.close()
            self._connected = False
            logger.debug("ServiceContainer closed")

    async def __aenter__(self) -> "ServiceContainer":
        self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def registry(self) -> SourceRegistry:
        if self._registry is None:
            self._registry = load_registry(self.config.sources_file)
        return self._registry

    @property
    def resolver(self) -> CredentialResolver:
        return self._resolver

    @property
    def store(self) -> SnapshotStore:
        if self._store is None:
            self._store = SnapshotStore(SQLiteKeyValueStore(self.db))
        return self._store

    @property
    def fetcher(self) -> ModelFetcher:
        if self._fetcher is None:
            self._fetcher = ModelFetcher(self._resolver, self.config.monitor)
        return self._fetcher

    @property
    def notifier(self) -> Notifier:
        if self._notifier is None:
            self._notifier = TelegramNotifier(self.config.telegram)
        return self._notifier

    @property
    def orchestrator(self) -> MonitorOrchestrator:
        if self._orchestrator is None:
            self._orchestrator = MonitorOrchestrator(
                registry=self.registry,
                resolver=self._resolver,
                fetcher=self.fetcher,
                store=self.store,
                notifier=self.notifier,
                config=self.config.monitor,
            )
        return self._orchestrator

    @property
    def status(self) -> "StatusService":
        if self._status is None:
            from .status import StatusService

            self._status = StatusService.from_container(self)
        return self._status
