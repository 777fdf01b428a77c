"""Service layer for modelwatch.

Example usage:

    from modelwatch.services import ServiceContainer

    async with ServiceContainer(config) as services:
        # Run one monitoring cycle
        result = await services.orchestrator.run()

        # Per-source status
        status = services.status.get_status()
"""

from .container import ServiceContainer
from .scheduler import MonitorScheduler
from .status import StatusService

__all__ = [
    "ServiceContainer",
    "MonitorScheduler",
    "StatusService",
]
