# src/fepull/config.py
"""
Module Description:
Defines the central runtime configuration dictionary (CONFIG) for fepull.
Loads settings from environment variables (optionally from a .env file via
python-dotenv) for fetch concurrency, git timeouts, retry behaviour, logging
and the location of temporary workspaces. Includes a validation function to
check the values are usable.

Links:
- python-dotenv: https://github.com/theskumar/python-dotenv
- os module: https://docs.python.org/3/library/os.html

Sample Input/Output:

- Accessing config values:
  from fepull.config import CONFIG
  concurrency = CONFIG["fetch"]["concurrency"]

- Running validation:
  python -m fepull.config
  (Prints validation status and exits with 0 or 1)
"""
import os
import sys
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from fepull.core.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_FETCH_ATTEMPTS,
    DEFAULT_GIT_TIMEOUT,
    DEFAULT_RETRY_BASE_DELAY,
)

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def load_settings() -> Dict[str, Any]:
    """Build the settings dictionary from the current environment."""
    return {
        "fetch": {
            "concurrency": _env_int("FEPULL_CONCURRENCY", DEFAULT_CONCURRENCY),
            "attempts": _env_int("FEPULL_FETCH_ATTEMPTS", DEFAULT_FETCH_ATTEMPTS),
            "retry_base_delay": _env_float("FEPULL_RETRY_BASE_DELAY", DEFAULT_RETRY_BASE_DELAY),
        },
        "git": {
            "timeout": _env_float("FEPULL_GIT_TIMEOUT", DEFAULT_GIT_TIMEOUT),
        },
        "workspace": {
            "root": os.getenv("FEPULL_WORKSPACE_ROOT") or None,
        },
        "logging": {
            "level": os.getenv("FEPULL_LOG_LEVEL", "INFO").upper(),
            "file": os.getenv("FEPULL_LOG_FILE") or None,
        },
    }


CONFIG = load_settings()


def validate_config(config: Optional[Dict[str, Any]] = None) -> bool:
    """
    Validate that the settings are within usable ranges.
    Returns True if valid, False otherwise. Logs errors.
    """
    config = config or CONFIG
    validation_passed = True

    if config["fetch"]["concurrency"] < 1:
        logger.error("FEPULL_CONCURRENCY must be at least 1")
        validation_passed = False
    if config["fetch"]["attempts"] < 1:
        logger.error("FEPULL_FETCH_ATTEMPTS must be at least 1")
        validation_passed = False
    if config["fetch"]["retry_base_delay"] < 0:
        logger.error("FEPULL_RETRY_BASE_DELAY cannot be negative")
        validation_passed = False
    if config["git"]["timeout"] <= 0:
        logger.error("FEPULL_GIT_TIMEOUT must be positive")
        validation_passed = False
    if config["logging"]["level"] not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
        logger.error(f"Unknown FEPULL_LOG_LEVEL: {config['logging']['level']}")
        validation_passed = False

    return validation_passed


if __name__ == "__main__":
    if validate_config():
        print("✅ VALIDATION PASSED - fepull settings are valid")
        sys.exit(0)
    print("❌ VALIDATION FAILED - see log output above")
    sys.exit(1)
