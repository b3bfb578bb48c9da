"""File logging for habo-data.

Every module logs through ``logging.getLogger(__name__)``. Records propagate up
to the ``habo_data`` logger, which :func:`get_logger` attaches to a rotating
``habo.log`` under the platform log directory. The threshold comes from the
``HABO_LOG_LEVEL`` environment variable (default INFO) and ``habo --verbose``
lowers it to DEBUG.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "habo_data"
_LOG_FILE = "habo.log"
_LEVEL_ENV = "HABO_LOG_LEVEL"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def _level_from_env() -> int:
    name = os.environ.get(_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def log_file_path() -> Path:
    """Location of the application log file."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def get_logger() -> logging.Logger:
    """Return the ``habo_data`` logger, attaching the file handler on first call."""
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    app_logger = logging.getLogger(_APP_NAME)
    app_logger.setLevel(_level_from_env())
    if not app_logger.handlers:
        app_logger.addHandler(handler)
    app_logger.propagate = False

    _logger = app_logger
    return _logger


def set_level(level: int | str) -> None:
    """Change the threshold of the application logger."""
    get_logger().setLevel(level)
