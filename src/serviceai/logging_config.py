"""Centralized logging configuration."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings


def setup_logging(level: str | None = None, console: Console | None = None) -> None:
    """Install a Rich handler on the root logger.

    Args:
        level: Log level name; defaults to the SERVICEAI_LOG_LEVEL setting
        console: Optional Rich console to log to (defaults to stderr)
    """
    if level is None:
        level = Settings.from_env().log_level

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[handler],
        force=True,
    )
