"""
Logging setup for the service.
"""

import logging
import sys
from typing import Optional

from .rules import LOG_LEVEL


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger with a single stream handler.

    Safe to call more than once; handlers are replaced, not stacked.
    Records still propagate to the root logger of an embedding app.
    """
    numeric_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logger = logging.getLogger("ratechart")
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
