"""Shared utilities for CLI commands."""

import sys

from loguru import logger
from rich.console import Console

console = Console()


def configure_cli_logging(verbose: bool = False) -> None:
    """Send service logs to stderr; quiet unless ``--verbose``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> | {message} | {extra}",
        colorize=True,
    )
