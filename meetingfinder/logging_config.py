"""
Centralized logging configuration for meetingfinder.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "meetingfinder"


def setup_logging(level: str | int = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """
    Configure and return the package logger.

    Log records go to stderr through a rich handler so they never mix with
    the result output printed on stdout.

    Args:
        level: Logging level name or number
        console: Optional rich console to log to (defaults to stderr)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return logger

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    logger.addHandler(handler)

    return logger
