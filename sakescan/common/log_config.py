"""
Logging Configuration

Console logging goes to stderr so stdout stays free for the review and
summary output of the scripts. Import runs can also append to a log file,
which keeps a record of every catalog write and per-item failure.
"""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "sakescan"
CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: If True, set level to DEBUG
        quiet: If True, console shows warnings and errors only
        log_file: Optional path; gets every record at INFO or above
            (DEBUG with verbose), regardless of quiet

    Returns:
        The configured "sakescan" logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    console_level = logging.WARNING if quiet and not verbose else level

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Repeated calls replace handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
