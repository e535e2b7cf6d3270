"""
The L interface and its small implementations.

Code that only needs to log should accept an L, not a Logger:

    def sync(store, log: L = NOOP) -> None:
        log.logf("[DEBUG] syncing %s", store)

Implementations:
  - Logger: the real thing (taglog.core)
  - Func: wraps any callable taking (fmt, *args)
  - NoOp: discards everything
  - StdLogger: forwards to a stdlib logging.Logger at the tagged level
"""

import logging
from typing import Any, Callable, Protocol, runtime_checkable

from taglog.classifier import classify, strip_newline
from taglog.core import interpolate
from taglog.records import Level


@runtime_checkable
class L(Protocol):
    """Anything able to log a printf-style message."""

    def logf(self, fmt: str, *args: Any) -> None: ...


class Func:
    """Adapts a plain function to L."""

    def __init__(self, fn: Callable[..., Any]):
        self._fn = fn

    def logf(self, fmt: str, *args: Any) -> None:
        self._fn(fmt, *args)


class NoOp:
    """L that drops every message."""

    def logf(self, fmt: str, *args: Any) -> None:
        pass


NOOP = NoOp()


# Level → stdlib logging level. PANIC/FATAL map to CRITICAL and do not terminate.
STD_LEVELS: dict[Level, int] = {
    Level.TRACE: 5,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.PANIC: logging.CRITICAL,
    Level.FATAL: logging.CRITICAL,
}


class StdLogger:
    """
    L backed by the standard library's logging.

    The message tag picks the stdlib level; the tag itself is stripped.
    Filtering, formatting and handlers are left to the stdlib configuration.
    """

    def __init__(self, logger: logging.Logger | str | None = None):
        if logger is None or isinstance(logger, str):
            logger = logging.getLogger(logger)
        self.logger = logger

    def logf(self, fmt: str, *args: Any) -> None:
        level, message = classify(interpolate(fmt, args))
        std_level = STD_LEVELS[level]
        if self.logger.isEnabledFor(std_level):
            # stacklevel=2 attributes the record to our caller, not this method
            self.logger.log(std_level, "%s", strip_newline(message), stacklevel=2)
