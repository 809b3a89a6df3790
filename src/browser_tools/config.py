"""
Logging setup and environment helpers.

``.env`` is loaded on import so every ``from_env`` config sees it. Logging
goes to stderr only; stdout is reserved for tool output.

Usage:
    from browser_tools.config import configure_logging

    configure_logging()                # level from LOG_LEVEL
    configure_logging(verbose=True)    # timestamps and logger names
"""

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

VALID_LEVELS = {
    name: getattr(logging, name)
    for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}

# Libraries that log chatter at INFO/DEBUG
NOISY_LOGGERS = ("playwright", "asyncio", "httpx", "httpcore")


def get_log_level() -> int:
    """
    Resolve LOG_LEVEL (case-insensitive) to a logging constant.

    Unknown names print a warning to stderr and fall back to WARNING.
    """
    name = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if name in VALID_LEVELS:
        return VALID_LEVELS[name]

    print(
        f"Warning: Invalid LOG_LEVEL '{name}' (expected one of "
        f"{', '.join(VALID_LEVELS)}), using {DEFAULT_LOG_LEVEL}",
        file=sys.stderr,
    )
    return VALID_LEVELS[DEFAULT_LOG_LEVEL]


def configure_logging(level: Optional[int] = None, verbose: bool = False) -> None:
    """
    Configure the root logger for a CLI run.

    Args:
        level: Explicit level; LOG_LEVEL is used when None
        verbose: Use the timestamped format
    """
    if level is None:
        level = get_log_level()

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE,
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("browser_tools").setLevel(level)

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable (true/1/yes)."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back on bad values."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring non-integer %s=%r, using %d", name, value, default
        )
        return default
