"""Logging setup for scripts and notebooks using boostprep."""

import logging
import sys
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> logging.Logger:
    """
    Configure the boostprep package logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Console log level
        log_file: Optional file receiving DEBUG and above

    Returns:
        The configured 'boostprep' logger
    """
    logger = logging.getLogger("boostprep")
    logger.setLevel(logging.DEBUG)

    # Replace handlers from an earlier call
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger
