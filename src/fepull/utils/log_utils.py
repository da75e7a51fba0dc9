"""
Logging utilities for fepull
"""

import os
import sys
from typing import Optional

from loguru import logger

VALID_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def setup_logger(level: str = "INFO", log_file: Optional[str] = None):
    """
    Setup the loguru logger for a CLI session.

    Args:
        level: Logging level for the stderr sink
        log_file: Optional path of a rotating log file that records DEBUG and above
    """
    level = level.upper()
    if level not in VALID_LEVELS:
        print(f"Warning: Invalid log level '{level}'. Defaulting to INFO.", file=sys.stderr)
        level = "INFO"

    # Remove default handler
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="{time:HH:mm:ss} | {level: <7} | {message}",
        backtrace=False,
        diagnose=False,
    )

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        )

    return logger
