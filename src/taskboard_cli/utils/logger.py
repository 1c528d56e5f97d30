"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskboard_cli"
_LOG_FILE = "taskboard.log"
_LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Location of the rotating log file."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or a module logger beneath it.

    Module loggers (``get_logger(__name__)``) have no handlers and propagate to
    the application logger, so importing a module never creates the log
    directory. The file handler is attached on the first unnamed call.
    """
    if name is not None:
        return logging.getLogger(name)

    global _logger
    if _logger is None:
        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file_path()))
        _logger = logger
    return _logger


def set_level(level: str) -> None:
    """Set the application log level from a config value such as ``"INFO"``.

    Unknown names fall back to INFO.
    """
    value = logging.getLevelName(level.upper())
    get_logger().setLevel(value if isinstance(value, int) else logging.INFO)
