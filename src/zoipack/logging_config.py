"""
Utility module for logging configuration.

This module configures the logging system shared by the zoipack tools.
"""

import logging
import sys


class _MaxLevelFilter(logging.Filter):
    """Pass only records strictly below a given level."""

    def __init__(self, level):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno < self.level


def setup_logging(level=logging.INFO, fmt="%(message)s"):
    """
    Configure logging for the zoipack tools.

    Informational records go to stdout; warnings and errors go to stderr so that
    failures land on the error stream.

    Args:
        level (int | str): Logging level (default: logging.INFO)
        fmt (str): Record format passed to the formatter.

    Returns:
        logging.Logger: The configured package logger.
    """
    # Create logger
    logger = logging.getLogger("zoipack")
    logger.setLevel(level)
    logger.propagate = False

    # Drop handlers from an earlier call so messages are not doubled
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")

    # Console handler for regular progress output
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.addFilter(_MaxLevelFilter(logging.WARNING))
    console_handler.setFormatter(formatter)

    # Error handler for warnings and failures
    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(formatter)

    logger.addHandler(console_handler)
    logger.addHandler(error_handler)

    return logger
