"""Centralized logging configuration.

All modules use `get_logger(__name__)` to obtain a logger. Output goes to
stderr so it never mixes with command output on stdout.
"""

import logging
import os
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ROOT_LOGGER = "spendbook"
_initialized = False
_level_locked = False


def _parse_level(level: str | int) -> int:
    """Resolve a level name or number, defaulting to WARNING for unknown names."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def _init_logging() -> None:
    """Attach the stderr handler to the package logger once."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger(_ROOT_LOGGER)
    root.setLevel(_parse_level(os.environ.get("SPENDBOOK_LOG_LEVEL", "WARNING")))
    root.addHandler(handler)
    _initialized = True


def set_level(level: str | int, lock: bool = False) -> None:
    """Change the package log level.

    Args:
        level: Level name or number.
        lock: Keep this level even if set_level is called again later, so an
            explicit --verbose wins over the config file.
    """
    global _level_locked
    _init_logging()
    if _level_locked and not lock:
        return
    _level_locked = _level_locked or lock
    logging.getLogger(_ROOT_LOGGER).setLevel(_parse_level(level))


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    _init_logging()
    return logging.getLogger(name)
