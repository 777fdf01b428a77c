"""Change and failure notifications."""

from .base import Notifier, NullNotifier
from .messages import format_time, render_change, render_failure
from .telegram import TelegramNotifier

__all__ = [
    "Notifier",
    "NullNotifier",
    "TelegramNotifier",
    "format_time",
    "render_change",
    "render_failure",
]
