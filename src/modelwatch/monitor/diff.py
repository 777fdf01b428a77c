"""Snapshot comparison by resource identity."""

from __future__ import annotations

from ..core.types import ChangeSet, FetchSuccess, Snapshot


def compare(prior: Snapshot | None, current: FetchSuccess) -> ChangeSet:
    """Compute what was added and removed since the prior snapshot.

    Only ids are compared: a resource whose name, creation time or owner
    changed under the same id is not a change.

    Args:
        prior: Last persisted snapshot, or None if the source is new.
        current: Fresh fetch result.

    Returns:
        ChangeSet with ``added`` in current order and ``removed`` in prior
        order. Without a prior snapshot every current resource is added
        and the set is flagged as a first observation.
    """
    if prior is None:
        return ChangeSet(added=tuple(current.resources), is_first_observation=True)

    prior_ids = {r.id for r in prior.resources}
    current_ids = {r.id for r in current.resources}

    added = tuple(r for r in current.resources if r.id not in prior_ids)
    removed = tuple(r for r in prior.resources if r.id not in current_ids)

    return ChangeSet(
        added=added,
        removed=removed,
        is_first_observation=False,
        has_changes=bool(added or removed),
    )
