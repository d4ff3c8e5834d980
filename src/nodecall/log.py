"""Loguru setup for the nodecall CLI."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>"

# Library code stays quiet unless an application opts in.
logger.disable("nodecall")


def setup_logging(level: str = "INFO") -> None:
    """Route nodecall logs to stderr at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    logger.enable("nodecall")
