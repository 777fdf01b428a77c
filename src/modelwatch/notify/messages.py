"""Rendering of notification messages.

Messages use the Telegram HTML subset (``<b>`` and ``<code>``); every
interpolated value is escaped.
"""

from __future__ import annotations

import html
from datetime import datetime, timezone
from typing import Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from ..core.types import ChangeSet, FetchFailure, FetchSuccess, Resource, SourceDescriptor


def format_time(tz_name: str = "UTC", now: datetime | None = None) -> str:
    """Format a timestamp for display in the given IANA timezone."""
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {tz_name!r}, using UTC")
        tz = timezone.utc
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(tz).strftime("%Y-%m-%d %H:%M")


def _resource_lines(resources: Iterable[Resource]) -> str:
    return "".join(f"  • {html.escape(r.label)}\n" for r in resources)


def render_change(
    source: SourceDescriptor,
    changes: ChangeSet,
    current: FetchSuccess,
    timestamp: str,
) -> str:
    """Render a change notification.

    A first observation states so with the current count. Otherwise the
    added and removed models are listed under their own headings, and a
    heading is omitted when its list is empty.
    """
    name = html.escape(source.name)

    if changes.is_first_observation:
        message = f"🆕 <b>Model provider: {name}</b>\n\n"
        message += "✅ <b>First observation</b>\n"
        message += f"📊 Current models: {current.count}\n"
    else:
        message = f"🔔 <b>Model provider: {name}</b>\n\n"
        if changes.added:
            message += f"<b>➕ Added models ({len(changes.added)}):</b>\n"
            message += _resource_lines(changes.added)
            message += "\n"
        if changes.removed:
            message += f"<b>➖ Removed models ({len(changes.removed)}):</b>\n"
            message += _resource_lines(changes.removed)
            message += "\n"
        message += f"📊 Total models: {current.count}\n"

    message += f"\n⏰ Updated: {timestamp}"
    return message


def render_failure(
    source: SourceDescriptor,
    failure: FetchFailure,
    required_secrets: Iterable[str],
    timestamp: str,
) -> str:
    """Render a failure notification listing the secrets the source needs."""
    message = f"❌ <b>Monitoring failed: {html.escape(source.name)}</b>\n\n"
    message += f"⚠️ <b>Error:</b>\n<code>{html.escape(failure.error)}</code>\n\n"

    secrets = sorted(required_secrets)
    if secrets:
        message += "🔑 <b>Required configuration:</b>\n"
        message += "".join(f"  • {html.escape(s)}\n" for s in secrets)

    message += f"\n⏰ Time: {timestamp}"
    return message
