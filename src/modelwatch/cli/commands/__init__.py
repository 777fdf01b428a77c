"""Command implementations for modelwatch CLI."""

from .monitor import handle_clear, handle_run
from .serve import add_serve_arguments, handle_serve
from .status import handle_sources, handle_status

__all__ = [
    "handle_run",
    "handle_clear",
    "handle_status",
    "handle_sources",
    "handle_serve",
    "add_serve_arguments",
]
