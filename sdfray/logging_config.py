"""Logging setup for scripts that drive ``sdfray``.

The package only creates module loggers (``logging.getLogger(__name__)``);
nothing is configured at import time.  Call :func:`setup_logging` once from
a script to see render timings and fractal statistics.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOGGER_NAME = "sdfray"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route the ``sdfray`` logger to stdout and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call
    (they are closed first), so records are never duplicated.

    Parameters
    ----------
    level:
        Threshold for the package logger and its handlers, e.g.
        ``logging.DEBUG``.
    log_file:
        Path of a log file, truncated on open.  ``None`` logs to stdout only.

    Returns
    -------
    logging.Logger
        The configured ``sdfray`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)

    return logger
