"""
Logging utilities for the decoder

The library stays silent unless a log file is configured; applications
embedding it can still attach their own handlers to the 'osudb' logger.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .config import Config

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

DECODER_LOGGER_NAME = 'osudb'

# Handler installed by get_decoder_logger(), swapped when Config.LOG_FILE changes
_decoder_handler: Optional[logging.Handler] = None


def _create_handler(log_file: Optional[Path]) -> logging.Handler:
    if log_file is None:
        return logging.NullHandler()

    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return file_handler


def setup_logger(name: str, log_file: Optional[Path] = None, level=logging.WARNING) -> logging.Logger:
    """
    Set up a logger with an optional file handler

    Args:
        name: Logger name (e.g., 'osudb')
        log_file: Path to log file (None keeps the logger silent)
        level: Logging level (default: WARNING)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers if logger already exists
    if logger.handlers:
        return logger

    logger.addHandler(_create_handler(log_file))
    return logger


def log_exception(logger: logging.Logger, message: str, exc: Exception):
    """
    Log an exception with full traceback

    Args:
        logger: Logger instance
        message: Short description of what failed
        exc: Exception object
    """
    logger.debug(f"{message}: {exc}", exc_info=True)


def get_decoder_logger() -> logging.Logger:
    """
    Get logger for the decoder, configured from Config

    Called on every decode, so changes to Config.LOG_FILE take effect on the
    next call: the handler this function installed is replaced by a file
    handler for the new path, or by a NullHandler once the file is unset.
    Handlers attached by the application are left alone.
    """
    global _decoder_handler

    Config.validate()
    log_file = Config.log_file()

    logger = logging.getLogger(DECODER_LOGGER_NAME)
    logger.setLevel(Config.log_level())

    wanted = os.path.abspath(log_file) if log_file is not None else None
    current = getattr(_decoder_handler, 'baseFilename', None)

    if _decoder_handler in logger.handlers and current == wanted:
        return logger

    if _decoder_handler is not None:
        logger.removeHandler(_decoder_handler)
        _decoder_handler.close()

    _decoder_handler = _create_handler(log_file)
    logger.addHandler(_decoder_handler)
    return logger
