"""
Logging setup for the scoring service.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

from tournament_scoring.core.config import LOG_LEVEL, LOG_FILE

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at the service level
LIBRARY_LOG_LEVELS = {
    "uvicorn": logging.WARNING,
    "fastapi": logging.WARNING,
    "celery": logging.INFO,
    "kombu": logging.WARNING,
    "amqp": logging.WARNING,
}


def _resolve_level(log_level: Union[int, str, None]) -> int:
    if log_level is None:
        log_level = LOG_LEVEL
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_level: Union[int, str, None] = None, log_file: Optional[str] = LOG_FILE):
    """
    Configure the root logger with a stdout handler and, if given, a rotating log file.

    Args:
        log_level: Level number or name, defaults to LOG_LEVEL
        log_file: Path of the log file, defaults to LOG_FILE (unset means stdout only)

    Returns:
        The root logger
    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name, library_level in LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
