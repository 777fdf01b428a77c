"""CLI entry point for modelwatch."""

import argparse
import sys
from typing import NoReturn

from .. import __version__
from ..core.config import Config
from ..core.exceptions import ConfigurationError
from ..core.logging import configure_logging
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="modelwatch",
        description="Monitor LLM provider model lists for additions and removals",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Minimum log level (default: from environment or INFO)")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("run", help="Run one monitoring cycle")
    subparsers.add_parser("status", help="Show per-source monitoring status")
    subparsers.add_parser("clear", help="Delete all stored snapshots")
    subparsers.add_parser("sources", help="List registered sources")

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP front door")
    commands.add_serve_arguments(serve_parser)

    return parser


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    try:
        config = Config.from_env()
    except (ConfigurationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.log_json:
        config.log_json = True
    configure_logging(config.log_level, json=config.log_json)

    try:
        if args.command == "run":
            commands.handle_run(args, config)
        elif args.command == "status":
            commands.handle_status(args, config)
        elif args.command == "clear":
            commands.handle_clear(args, config)
        elif args.command == "sources":
            commands.handle_sources(args, config)
        elif args.command == "serve":
            commands.handle_serve(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
