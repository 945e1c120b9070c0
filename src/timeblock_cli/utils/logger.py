"""Application-wide logger writing to platformdirs user_log_dir.

Set ``TIMEBLOCK_LOG_LEVEL`` (e.g. ``INFO``) to raise the threshold; the
default records everything down to DEBUG.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "timeblock_cli"
_LOG_FILE = "timeblock.log"
_LEVEL_ENV = "TIMEBLOCK_LOG_LEVEL"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def _resolve_level() -> int:
    name = os.environ.get(_LEVEL_ENV, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def get_logger() -> logging.Logger:
    """Return the shared ``timeblock_cli`` logger, creating its file handler once."""
    global _logger
    if _logger is not None:
        return _logger

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_resolve_level())
    if not logger.handlers:
        handler = logging.handlers.RotatingFileHandler(
            log_dir / _LOG_FILE,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger
