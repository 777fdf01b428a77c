"""Serve command for modelwatch CLI."""

import argparse

import uvicorn
from loguru import logger

from ...core.config import Config
from ...services import ServiceContainer
from ...web import create_app


def add_serve_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the serve command."""
    parser.add_argument("--host", help="Bind address (default: MODELWATCH_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Bind port (default: MODELWATCH_PORT or 8000)")
    parser.add_argument(
        "--interval",
        type=float,
        help="Seconds between scheduled cycles, 0 to disable (default: 3600)",
    )


def handle_serve(args, config: Config) -> None:
    """Handle serve command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.interval is not None:
        config.server.interval_seconds = args.interval

    app = create_app(ServiceContainer(config), schedule_interval=config.server.interval_seconds)
    logger.info(f"Starting front door on {config.server.host}:{config.server.port}")
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level="info")
