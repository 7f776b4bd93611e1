"""
Logging setup for the wink-style command line tool.
"""

import logging
import os
import sys
from typing import Optional, TextIO

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

ROOT_LOGGER_NAME = "style_engine"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"


class LogFormatter(logging.Formatter):
    """Console formatter that can wrap the level name in ANSI colors."""

    RESET = '\033[0m'
    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[1;31m'
    }

    def __init__(self, colored: bool = False, **kwargs):
        self.colored = colored
        super().__init__(**kwargs)

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname) if self.colored else None
        if color is None:
            return super().formatMessage(record)
        # Only the level field is colored, the record itself is left as is
        plain_level = record.levelname
        record.levelname = f"{color}{plain_level}{self.RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain_level


def _level(name: Optional[str], default: int) -> int:
    return LOG_LEVELS.get((name or '').upper(), default)


def setup_logging(log_file: Optional[str] = None,
                  console_level: Optional[str] = "WARNING",
                  file_level: Optional[str] = "DEBUG",
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach handlers to the ``style_engine`` logger.

    Colors are used only when the console stream is a terminal. Calling
    this again once handlers exist returns the logger unchanged.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level name
        file_level: File logging level name
        stream: Console stream, stderr by default

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger

    stream = stream or sys.stderr
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(_level(console_level, logging.WARNING))
    colored = hasattr(stream, 'isatty') and stream.isatty()
    console_handler.setFormatter(LogFormatter(colored=colored, fmt=CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(_level(file_level, logging.DEBUG))
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    logger.setLevel(min(handler.level for handler in logger.handlers))
    return logger


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """Log ``exception`` with its traceback at ERROR level."""
    logger.error(f"{message}: {exception}", exc_info=exception)
