"""
Process-wide default Logger.

A convenience for scripts and small tools. Libraries should take an L
argument instead of reaching for this.

Usage:
    from taglog import setup, printf
    setup(DEBUG, template(Preset.SHORT_DEBUG))
    printf("[DEBUG] started with %d workers", n)
"""

import threading
from typing import Any, Optional

from taglog.core import Logger, _FACADE_FRAMES
from taglog.options import Option

_instance: Optional[Logger] = None
_lock = threading.Lock()


def setup(*options: Option) -> Logger:
    """Replace the default logger with one built from `options`."""
    global _instance
    logger = Logger(*options)
    with _lock:
        _instance = logger
    return logger


def default() -> Logger:
    """Get or create the default logger."""
    global _instance
    if _instance is None:
        with _lock:
            if _instance is None:
                _instance = Logger()
    return _instance


def printf(fmt: str, *args: Any) -> None:
    """Log through the default logger. Caller info points at our caller."""
    logger = default()
    # printf stands in for logf, so the frame count is unchanged
    logger._log(_FACADE_FRAMES + logger.caller_depth, fmt, args)


def reset() -> None:
    """Drop the default logger. For testing only."""
    global _instance
    with _lock:
        _instance = None
