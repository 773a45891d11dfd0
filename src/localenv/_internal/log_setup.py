"""Logging setup for the localenv CLI (loguru, stderr only)."""

import sys

from loguru import logger


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    stdout is reserved for text the shell evaluates, so every sink writes
    to stderr.

    Args:
        verbose: Whether to enable debug logging
    """
    logger.remove()

    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
    else:
        logger.add(
            sys.stderr,
            level="WARNING",
            format="localenv: <level>{message}</level>"
        )
