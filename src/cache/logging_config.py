"""Logging setup for the cache and linalg packages."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

NAMESPACES = ("cache", "linalg")


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Attach a stdout handler (and optionally a file handler) to our loggers.

    Existing handlers are cleared first so repeated calls don't duplicate output.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    # Both loggers share handler objects; close each one once
    previous = {h for name in NAMESPACES for h in logging.getLogger(name).handlers}
    for handler in previous:
        handler.close()

    for name in NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
