"""Loguru sink configuration."""

import sys

from loguru import logger


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Replace loguru's default handler with a single stderr sink.

    Args:
        level: Minimum level to emit.
        json: Emit one JSON object per record instead of text lines.
    """
    logger.remove()
    if json:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(
            sys.stderr,
            level=level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan> - <level>{message}</level>"
            ),
        )
