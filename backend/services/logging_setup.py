"""Logging setup shared by the CLI and the HTTP app"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# Loggers of this project's top-level packages, plus main.py run as a script
_LOGGER_NAMES = ("services", "routers", "cli", "main", "__main__")


def setup_logging(level: str | int = "INFO") -> None:
    """
    Send this project's log records to stderr.

    stdout is left alone because the CLI writes diff text there.

    Args:
        level: Logging level name or number
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for name in _LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Clear existing handlers
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False
