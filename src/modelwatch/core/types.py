"""Type definitions for modelwatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class SourceDescriptor:
    """A catalog endpoint to poll.

    Attributes:
        id: Unique source identifier, also used in storage keys.
        name: Display name used in notifications.
        endpoint: URL answering GET with a list of models.
        headers: Header templates; values may contain ``{{SECRET_NAME}}``
            placeholders resolved from credentials at request time.
    """

    id: str
    name: str
    endpoint: str
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SourceDescriptor":
        """Create a descriptor from a mapping (registry file entry)."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            endpoint=str(data["endpoint"]),
            headers={str(k): str(v) for k, v in (data.get("headers") or {}).items()},
        )


@dataclass(frozen=True)
class Resource:
    """One entry of a source's catalog.

    Identity is ``id`` alone; the other fields are informational and
    changes to them are not reported.
    """

    id: str
    name: str
    created: int | float | str | None = None
    owned_by: str | None = None

    @property
    def label(self) -> str:
        """Name for display, falling back to the id."""
        return self.name or self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created": self.created,
            "owned_by": self.owned_by,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Resource":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or str(data["id"]),
            created=data.get("created"),
            owned_by=data.get("owned_by"),
        )


@dataclass(frozen=True)
class FetchSuccess:
    """A source answered and its catalog was normalized."""

    source_id: str
    resources: tuple[Resource, ...]
    timestamp: str

    @property
    def count(self) -> int:
        return len(self.resources)

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    """A source could not be fetched after all retries."""

    source_id: str
    error: str
    timestamp: str

    @property
    def success(self) -> bool:
        return False


FetchResult = Union[FetchSuccess, FetchFailure]


@dataclass
class Snapshot:
    """Last successfully observed catalog of a source, as persisted.

    Attributes:
        source_id: Source the snapshot belongs to.
        success: Always True for persisted snapshots.
        resources: Catalog entries in the order the source returned them.
        count: Number of resources.
        timestamp: When the catalog was observed (ISO-8601).
        error: Failure detail; only set on failure snapshots, which are
            never written to the store.
    """

    source_id: str
    success: bool
    resources: list[Resource] = field(default_factory=list)
    count: int = 0
    timestamp: str = ""
    error: str | None = None

    @classmethod
    def from_fetch(cls, result: FetchSuccess) -> "Snapshot":
        """Build the snapshot to persist from a successful fetch."""
        return cls(
            source_id=result.source_id,
            success=True,
            resources=list(result.resources),
            count=result.count,
            timestamp=result.timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        data: dict[str, Any] = {
            "success": self.success,
            "provider": self.source_id,
            "models": [r.to_dict() for r in self.resources],
            "count": self.count,
            "timestamp": self.timestamp,
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Snapshot":
        """Deserialize from the persisted JSON shape."""
        resources = [Resource.from_dict(m) for m in data.get("models") or []]
        return cls(
            source_id=data["provider"],
            success=bool(data.get("success", True)),
            resources=resources,
            count=int(data.get("count", len(resources))),
            timestamp=data.get("timestamp", ""),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class ChangeSet:
    """Difference between a prior snapshot and a fresh fetch.

    Attributes:
        added: Resources whose id is new, in current order.
        removed: Resources whose id disappeared, in prior order.
        is_first_observation: No prior snapshot existed.
        has_changes: Something was added or removed. Not evaluated for
            a first observation (always False there).
    """

    added: tuple[Resource, ...] = ()
    removed: tuple[Resource, ...] = ()
    is_first_observation: bool = False
    has_changes: bool = False

    @property
    def should_notify(self) -> bool:
        """Whether the change set warrants a notification and a write."""
        return self.is_first_observation or self.has_changes

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "added": [r.to_dict() for r in self.added],
            "removed": [r.to_dict() for r in self.removed],
            "isFirstTime": self.is_first_observation,
        }
        if not self.is_first_observation:
            data["hasChanges"] = self.has_changes
        return data


@dataclass(frozen=True)
class SourceOutcome:
    """Final result of reconciling one source in a cycle."""

    source_id: str
    success: bool
    timestamp: str
    resources: tuple[Resource, ...] = ()
    error: str | None = None
    changes: ChangeSet | None = None

    @property
    def count(self) -> int:
        return len(self.resources)

    @property
    def changed(self) -> bool:
        return self.changes is not None and self.changes.has_changes

    @classmethod
    def from_failure(cls, failure: FetchFailure) -> "SourceOutcome":
        return cls(
            source_id=failure.source_id,
            success=False,
            timestamp=failure.timestamp,
            error=failure.error,
        )

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "provider": self.source_id,
                "error": self.error,
                "timestamp": self.timestamp,
            }
        data: dict[str, Any] = {
            "success": True,
            "provider": self.source_id,
            "models": [r.to_dict() for r in self.resources],
            "count": self.count,
            "timestamp": self.timestamp,
        }
        if self.changes is not None:
            data["changes"] = self.changes.to_dict()
        return data


class CyclePhase(Enum):
    """Lifecycle of one monitoring cycle."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class CycleResult:
    """Outcomes of one cycle, in registry order."""

    outcomes: list[SourceOutcome] = field(default_factory=list)
    started_at: str = ""
    finished_at: str = ""

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def successful(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def changed(self) -> int:
        return sum(1 for o in self.outcomes if o.changed)

    def summary(self) -> dict[str, int]:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "changed": self.changed,
        }
