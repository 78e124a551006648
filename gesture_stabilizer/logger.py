"""
Logging setup for gesture_stabilizer.

Diagnostics go to stderr, since the replay tool owns stdout for its
event report, and optionally to a rotating file in the per-user log
directory. The level comes from the debug flag unless
$GESTURE_STABILIZER_LOG_LEVEL names one explicitly.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

from .config import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATEFMT,
    LOG_CONSOLE_FORMAT,
    LOG_DIR_ENV_VAR,
    LOG_FILE_DATEFMT,
    LOG_FILE_FORMAT,
    LOG_FILENAME,
    LOG_LEVEL_ENV_VAR,
    LOG_MAX_BYTES,
)

LOGGER_NAME = "gesture_stabilizer"


def get_log_directory() -> Path:
    """
    Get the log directory path.

    Uses $GESTURE_STABILIZER_LOG_DIR when set, otherwise
    ~/.gesture_stabilizer/logs.

    Returns:
        Path to the log directory, created if it doesn't exist.
    """
    override = os.environ.get(LOG_DIR_ENV_VAR)
    log_dir = Path(override) if override else Path.home() / ".gesture_stabilizer" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def resolve_log_level(debug: bool = False) -> int:
    """
    Pick the console level.

    A valid level name in $GESTURE_STABILIZER_LOG_LEVEL wins over the
    debug flag; an unrecognized name is ignored.
    """
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else None
    if isinstance(level, int):
        return level
    return logging.DEBUG if debug else logging.INFO


def _console_handler(level: int, stream: Optional[TextIO]) -> logging.Handler:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_CONSOLE_FORMAT, datefmt=LOG_CONSOLE_DATEFMT))
    return handler


def _file_handler(log_path: Path) -> logging.Handler:
    # The file always records everything, whatever the console shows
    handler = RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATEFMT))
    return handler


def setup_logging(
    debug: bool = False,
    log_to_file: bool = True,
    log_filename: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure and return the project logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        debug: Enable debug-level console logging if True.
        log_to_file: Also write a rotating log file if True.
        log_filename: Override default log filename.
        stream: Console stream. Resolves sys.stderr at call time if None.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    console_level = resolve_log_level(debug)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(console_level, stream))

    if log_to_file:
        log_path = get_log_directory() / (log_filename or LOG_FILENAME)
        logger.addHandler(_file_handler(log_path))
        logger.setLevel(logging.DEBUG)
        logger.debug(f"Logging to file: {log_path}")
    else:
        logger.setLevel(console_level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child of the project logger, e.g. get_logger("Replay")."""
    base_logger = logging.getLogger(LOGGER_NAME)
    return base_logger.getChild(name) if name else base_logger
