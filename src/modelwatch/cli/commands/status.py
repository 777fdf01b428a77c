"""Status commands for modelwatch CLI."""

import asyncio

from ...core.config import Config
from ...services import ServiceContainer


def handle_status(args, config: Config) -> None:
    """Handle status command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    asyncio.run(_handle_status_async(config))


async def _handle_status_async(config: Config) -> None:
    async with ServiceContainer(config) as services:
        _print_status(services.status.get_status())


def _print_status(status: dict) -> None:
    print("Model Monitor Status")
    print("=" * 50)
    for source_id, info in status.items():
        configured = "configured" if info["configured"] else "not configured"
        if info.get("status") == "not_monitored":
            print(f"  {info['name']} [{source_id}]: not monitored ({configured})")
        else:
            print(
                f"  {info['name']} [{source_id}]: {info['count']} models, "
                f"updated {info['lastUpdate']} ({configured})"
            )


def handle_sources(args, config: Config) -> None:
    """Handle sources command."""
    asyncio.run(_handle_sources_async(config))


async def _handle_sources_async(config: Config) -> None:
    async with ServiceContainer(config) as services:
        for entry in services.status.list_sources():
            if entry["configured"]:
                print(f"  • {entry['id']}: {entry['endpoint']}")
            else:
                print(f"  • {entry['id']}: missing {', '.join(entry['missing'])}")
