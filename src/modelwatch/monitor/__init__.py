"""Polling and reconciliation engine."""

from .diff import compare
from .orchestrator import CatalogFetcher, MonitorOrchestrator, create_batches

__all__ = [
    "compare",
    "CatalogFetcher",
    "MonitorOrchestrator",
    "create_batches",
]
