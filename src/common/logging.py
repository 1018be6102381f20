"""Logging setup for the command line entry points.

Collectors run in worker threads, so by default each line carries the
thread name next to the logger name.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
THREADED_LOG_FORMAT = "%(asctime)s [%(levelname)s] (%(threadName)s) %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: int | str | None = None) -> int:
    """Turn a level name or number into a logging level.

    Without an explicit level, LOG_LEVEL from the environment wins over
    ``settings.logging.level``. Unknown names fall back to INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL") or settings.logging.level
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: int | str | None = None,
    module_name: str = "src",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a single handler to ``module_name`` and return that logger.

    Calling it again for the same logger is a no-op. Output goes to
    stderr unless ``stream`` is given, leaving stdout to command output.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    resolved = resolve_level(level)
    logger.setLevel(resolved)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    fmt = THREADED_LOG_FORMAT if settings.logging.include_thread else LOG_FORMAT
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    return logger
