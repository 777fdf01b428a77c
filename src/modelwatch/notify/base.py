"""Notifier protocol and the no-op implementation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.types import ChangeSet, FetchFailure, FetchSuccess, SourceDescriptor


@runtime_checkable
class Notifier(Protocol):
    """Delivers change and failure notifications.

    Implementations must never raise: delivery failures are logged and
    swallowed so one source's notification cannot affect another's
    reconciliation.
    """

    async def notify_change(
        self,
        source: SourceDescriptor,
        changes: ChangeSet,
        current: FetchSuccess,
    ) -> None:
        """Report a first observation or a changed catalog."""
        ...

    async def notify_failure(self, source: SourceDescriptor, failure: FetchFailure) -> None:
        """Report a failed fetch."""
        ...


class NullNotifier:
    """Notifier that drops every message."""

    async def notify_change(
        self,
        source: SourceDescriptor,
        changes: ChangeSet,
        current: FetchSuccess,
    ) -> None:
        return None

    async def notify_failure(self, source: SourceDescriptor, failure: FetchFailure) -> None:
        return None
