"""Logging setup for the importer.

Every module logs through ``get_logger(__name__)``. The loggers hang off one
``recipe_importer`` base logger that writes to stdout and, unless ``LOG_DIR``
is set to an empty string, to a timestamped file in ``LOG_DIR``. ``LOG_LEVEL``
picks the level (``INFO`` by default).
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

BASE_LOGGER_NAME = "recipe_importer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def _log_level() -> int:
    name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def log_file_path(log_dir: str, started: datetime | None = None) -> str:
    """Path of the log file for a process started at ``started``."""
    started = started or datetime.now()
    return os.path.join(log_dir, f"{BASE_LOGGER_NAME}_{started.strftime('%Y%m%d_%H%M%S')}.log")


def _build_handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    log_dir = os.getenv("LOG_DIR", "logs")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file_path(log_dir), encoding="utf-8"))
    return handlers


def _configure_base_logger() -> logging.Logger:
    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    if base_logger.handlers:
        return base_logger

    base_logger.setLevel(_log_level())
    base_logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in _build_handlers():
        handler.setFormatter(formatter)
        base_logger.addHandler(handler)

    base_logger.debug(
        "Logger configured with %s handler(s) at level %s",
        len(base_logger.handlers),
        logging.getLevelName(base_logger.level),
    )
    return base_logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for ``name`` (usually a module's ``__name__``).

    Module names inside the package already start with ``recipe_importer.``;
    names from outside it (``streamlit_app``, ``server``) are nested under the
    base logger so both share its handlers.
    """
    base_logger = _configure_base_logger()
    if not name or name == BASE_LOGGER_NAME:
        return base_logger

    if name.startswith(f"{BASE_LOGGER_NAME}."):
        return logging.getLogger(name)
    return base_logger.getChild(name)


__all__ = ["BASE_LOGGER_NAME", "get_logger", "log_file_path"]
