"""Normalization of model-list responses.

Providers answer their models endpoint in one of a few layouts. Each layout
has a matcher: a pure function taking the decoded JSON body and the source
and returning a list of resources, or None when the body is not in that
layout. Matchers are tried in order and the first match wins; a body no
matcher recognizes yields an empty catalog.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from loguru import logger

from ..core.types import Resource, SourceDescriptor

ShapeMatcher = Callable[[Any, SourceDescriptor], Optional[list[Resource]]]


def _first(entry: dict[str, Any], *keys: str) -> Any:
    """Value of the first key holding a truthy value, else None."""
    for key in keys:
        value = entry.get(key)
        if value:
            return value
    return None


def _build(
    entries: Iterable[Any],
    id_keys: tuple[str, ...],
    name_keys: tuple[str, ...],
    created_keys: tuple[str, ...],
    owner: Callable[[dict[str, Any]], Any],
) -> list[Resource]:
    resources = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug(f"Skipping non-object catalog entry: {entry!r}")
            continue
        resource_id = _first(entry, *id_keys)
        if resource_id is None:
            logger.debug(f"Skipping catalog entry without id: {entry!r}")
            continue
        resources.append(
            Resource(
                id=str(resource_id),
                name=str(_first(entry, *name_keys) or resource_id),
                created=_first(entry, *created_keys),
                owned_by=owner(entry),
            )
        )
    return resources


def match_data_list(body: Any, source: SourceDescriptor) -> list[Resource] | None:
    """OpenAI-compatible layout: ``{"data": [{"id", "created", "owned_by"}]}``."""
    if not isinstance(body, dict) or not isinstance(body.get("data"), list):
        return None
    return _build(
        body["data"],
        id_keys=("id",),
        name_keys=("id",),
        created_keys=("created",),
        owner=lambda entry: entry.get("owned_by"),
    )


def match_models_list(body: Any, source: SourceDescriptor) -> list[Resource] | None:
    """Layout with a ``models`` list of ``model_id``/``display_name`` entries."""
    if not isinstance(body, dict) or not isinstance(body.get("models"), list):
        return None
    return _build(
        body["models"],
        id_keys=("model_id", "id"),
        name_keys=("display_name", "name", "model_id", "id"),
        created_keys=("created_at", "created"),
        owner=lambda entry: source.name,
    )


def match_bare_list(body: Any, source: SourceDescriptor) -> list[Resource] | None:
    """A top-level JSON array of model objects."""
    if not isinstance(body, list):
        return None
    return _build(
        body,
        id_keys=("id", "model_id", "name"),
        name_keys=("name", "model_name", "id"),
        created_keys=("created", "created_at"),
        owner=lambda entry: entry.get("owned_by") or source.name,
    )


DEFAULT_MATCHERS: tuple[ShapeMatcher, ...] = (
    match_data_list,
    match_models_list,
    match_bare_list,
)


def parse_resources(
    body: Any,
    source: SourceDescriptor,
    matchers: Iterable[ShapeMatcher] = DEFAULT_MATCHERS,
) -> list[Resource]:
    """Normalize a decoded response body into resources.

    Args:
        body: Decoded JSON body.
        source: Source the body came from (supplies default owner).
        matchers: Layout matchers, in priority order.

    Returns:
        Resources from the first matching layout, or an empty list.
    """
    for matcher in matchers:
        resources = matcher(body, source)
        if resources is not None:
            return resources
    logger.debug(f"Unrecognized response layout from {source.name}")
    return []
