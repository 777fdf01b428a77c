"""Status service for per-source monitoring state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from ..sources.credentials import CredentialResolver
from ..sources.registry import SourceRegistry
from ..store.snapshots import SnapshotStore

if TYPE_CHECKING:
    from .container import ServiceContainer


class StatusService:
    """Reports, for every registered source, whether it is configured and
    what its last persisted snapshot looks like.

    Example:

        async with ServiceContainer(config) as services:
            status = services.status.get_status()
            print(status["openai"])
    """

    def __init__(
        self,
        registry: SourceRegistry,
        resolver: CredentialResolver,
        store: SnapshotStore,
    ):
        """Initialize StatusService.

        Args:
            registry: Sources to report on.
            resolver: Decides whether each source is configured.
            store: Where snapshots are read from.
        """
        self._registry = registry
        self._resolver = resolver
        self._store = store

    @classmethod
    def from_container(cls, container: "ServiceContainer") -> "StatusService":
        """Create a StatusService from a container's shared components."""
        return cls(
            registry=container.registry,
            resolver=container.resolver,
            store=container.store,
        )

    def get_status(self) -> dict[str, dict[str, Any]]:
        """Status of every registered source, keyed by source id.

        Sources with a snapshot report its count, timestamp and success
        flag; the others report ``status: "not_monitored"``.
        """
        logger.debug("Getting monitoring status")
        status: dict[str, dict[str, Any]] = {}

        for source in self._registry:
            configured = self._resolver.is_configured(source)
            snapshot = self._store.get(source.id)
            if snapshot is not None:
                status[source.id] = {
                    "name": source.name,
                    "count": snapshot.count,
                    "lastUpdate": snapshot.timestamp,
                    "success": snapshot.success,
                    "configured": configured,
                }
            else:
                status[source.id] = {
                    "name": source.name,
                    "configured": configured,
                    "status": "not_monitored",
                }

        return status

    def list_sources(self) -> list[dict[str, Any]]:
        """Registered sources with their configuration state."""
        return [
            {
                "id": source.id,
                "name": source.name,
                "endpoint": source.endpoint,
                "configured": self._resolver.is_configured(source),
                "missing": sorted(self._resolver.missing_secret_names(source)),
            }
            for source in self._registry
        ]
