"""HTTP front door for modelwatch."""

from .app import create_app

__all__ = ["create_app"]
