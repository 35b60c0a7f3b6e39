"""Logging configuration for webfactory."""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "webfactory.log"


class ColorFormatter(logging.Formatter):
    """Colorized log formatter for better visual output."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # Color a copy so file handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Set up logging configuration.

    Args:
        verbose: Enable verbose (DEBUG) logging
        log_dir: Optional directory receiving a webfactory.log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger('webfactory')

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if sys.stdout.isatty():  # Color output only for terminals
        formatter = ColorFormatter('%(levelname)s: %(message)s')
    else:
        formatter = logging.Formatter('%(levelname)s: %(message)s')

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')
        )
        logger.addHandler(file_handler)
        # The file gets everything; the console keeps its own level
        logger.setLevel(logging.DEBUG)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def reset_logging() -> None:
    """Remove handlers installed by setup_logging."""
    logger = logging.getLogger('webfactory')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (defaults to 'webfactory')

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f'webfactory.{name}')
    return logging.getLogger('webfactory')
