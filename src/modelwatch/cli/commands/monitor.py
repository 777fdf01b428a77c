"""Monitoring commands for modelwatch CLI."""

import asyncio
import json

from ...core.config import Config
from ...core.types import CycleResult
from ...services import ServiceContainer


def handle_run(args, config: Config) -> None:
    """Handle run command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    result = asyncio.run(_run_cycle(config))
    _print_result(result)


async def _run_cycle(config: Config) -> CycleResult:
    async with ServiceContainer(config) as services:
        return await services.orchestrator.run()


def _print_result(result: CycleResult) -> None:
    summary = result.summary()
    print(
        f"Sources: {summary['total']}  successful: {summary['successful']}  "
        f"failed: {summary['failed']}  changed: {summary['changed']}"
    )
    for outcome in result.outcomes:
        if not outcome.success:
            print(f"  ✗ {outcome.source_id}: {outcome.error}")
            continue
        changes = outcome.changes
        if changes is not None and changes.is_first_observation:
            detail = "first observation"
        elif changes is not None and changes.has_changes:
            detail = f"+{len(changes.added)} -{len(changes.removed)}"
        else:
            detail = "unchanged"
        print(f"  ✓ {outcome.source_id}: {outcome.count} models ({detail})")
    print()
    print(json.dumps(summary))


def handle_clear(args, config: Config) -> None:
    """Handle clear command."""
    removed = asyncio.run(_clear(config))
    print(f"Cleared {removed} snapshots.")


async def _clear(config: Config) -> int:
    async with ServiceContainer(config) as services:
        return services.orchestrator.clear()
