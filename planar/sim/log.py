"""
Logging setup for the simulation core (loguru).
"""

from __future__ import annotations

import sys

from loguru import logger

from config import LOG_LEVEL


def configure_logging(level: str | None = None) -> int:
    """Replace loguru's default sink with a stderr sink at `level` and return its id."""
    logger.remove()
    return logger.add(sys.stderr, level=(level or LOG_LEVEL).upper())
