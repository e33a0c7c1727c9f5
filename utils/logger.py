"""
Logger setup for hosts embedding the converters.

Library modules only emit through loguru's shared ``logger``; sinks are
configured here, once, by whoever owns the process.
"""

import sys
from typing import Optional

from loguru import logger

from config import settings


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | {name}:{function} | <level>{message}</level>"


def setup_logger(level: Optional[str] = None, sink=None) -> int:
    """
    Replace loguru's default handler with a single formatted sink.

    Args:
        level: Minimum level; defaults to settings.LOG_LEVEL
        sink: Destination; defaults to stderr

    Returns:
        Handler id, usable with ``logger.remove``
    """
    logger.remove()
    return logger.add(
        sink or sys.stderr,
        format=LOG_FORMAT,
        level=(level or settings.LOG_LEVEL).upper(),
        colorize=sink is None,
    )
