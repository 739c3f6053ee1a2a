"""Optional file logging for diagnostics.

The terminal belongs to the UI, so nothing is logged there. ``--log-file``
attaches one rotating file handler to the ``lazystage`` logger.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "lazystage"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3

_HANDLER_TAG_ATTR = "_lazystage_handler"


def configure_logging(log_file: Path | None, level: int = logging.DEBUG) -> logging.Logger:
    """Attach (or replace) the package file handler and return the package logger.

    Without ``log_file`` the package logger only gets a ``NullHandler``.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_TAG_ATTR, False):
            package_logger.removeHandler(handler)
            handler.close()

    if log_file is None:
        handler: logging.Handler = logging.NullHandler()
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        handler.setLevel(level)
        package_logger.setLevel(level)

    setattr(handler, _HANDLER_TAG_ATTR, True)
    package_logger.addHandler(handler)
    return package_logger
