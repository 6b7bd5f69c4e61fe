"""Logging setup shared by the CLI and library callers."""

from __future__ import annotations

import logging
import os

from .errors import ModPathsError

LOGGER_NAME = "modpaths"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    The level falls back to MODPATHS_LOG_LEVEL, then WARNING. Unknown level
    names raise a ``config_error``.
    """
    if level is None:
        level = os.environ.get("MODPATHS_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = level.strip().upper() or "WARNING"

    logger = logging.getLogger(LOGGER_NAME)
    try:
        logger.setLevel(level)
    except (TypeError, ValueError) as exc:
        raise ModPathsError(
            "config_error",
            f"Unknown log level: {level!r}.",
            details={"MODPATHS_LOG_LEVEL": str(level)},
        ) from exc

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
