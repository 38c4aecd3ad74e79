"""Logging setup.

Log records go to stderr through rich. Levels are given by name; ``warn``,
``fatal`` and ``panic`` are accepted as aliases.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
}

DEFAULT_LEVEL = "info"

logger = logging.getLogger("semtag")


def parse_log_level(name: str | None) -> int:
    """Map a level name to a :mod:`logging` level, ``INFO`` if unknown."""
    if not name:
        return LOG_LEVELS[DEFAULT_LEVEL]

    level = LOG_LEVELS.get(name.strip().lower())
    if level is None:
        logger.warning("Log level %r is not valid, falling back to %s", name, DEFAULT_LEVEL)
        return LOG_LEVELS[DEFAULT_LEVEL]
    return level


def configure_logging(level: str | None = None, console: Console | None = None) -> None:
    """Send semtag's log records to a rich handler at the given level."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(parse_log_level(level))
