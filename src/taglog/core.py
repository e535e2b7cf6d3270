"""
Logger: the facade tying classifier, caller resolver, template and router.

One call is one unit of work under a single lock:

    interpolate → classify → gate → resolve caller → render → route

so concurrent callers never interleave partial lines. Nothing on this path
raises into the caller. PANIC/FATAL run the fatal action after the lock is
released and all output is written.

Usage:
    log = Logger(DEBUG, template(Preset.FULL_DEBUG))
    log.logf("[DEBUG] loaded %d rows from %s", n, path)
    log.logf("WARN disk at %d%%", pct)
    log.logf("plain text is INFO")
"""

import os
import sys
import threading
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from taglog.caller import resolve_caller
from taglog.classifier import classify, strip_newline
from taglog.formatters import Template, compile_template, resolve_template
from taglog.options import Option, apply_options, check_caller_depth
from taglog.records import Level, LogRecord, EMPTY_CALLER
from taglog.routing import Sink, StreamRouter

# Skip from _log() up to the call site: _log → logf → caller
_FACADE_FRAMES = 2


class Logger:
    """Console logger with in-message level tags and two output streams."""

    def __init__(self, *options: Option):
        settings = apply_options(options)
        self._min_level: Level = settings.min_level
        self._template: Template = compile_template(
            resolve_template(settings), level_braces=settings.level_braces
        )
        self._router = StreamRouter(
            Sink(settings.out if settings.out is not None else sys.stdout),
            Sink(settings.err if settings.err is not None else sys.stderr),
        )
        self.now = settings.clock or datetime.now
        self.fatal = settings.fatal_action or exit_process
        self._resolver = settings.caller_resolver
        self._caller_depth = 0
        self.caller_depth = settings.caller_depth
        self._lock = threading.Lock()

    # ── Configuration (read-only after construction) ─────────────

    @property
    def min_level(self) -> Level:
        return self._min_level

    @property
    def template(self) -> Template:
        return self._template

    @property
    def caller_depth(self) -> int:
        return self._caller_depth

    @caller_depth.setter
    def caller_depth(self, value: int) -> None:
        """Adjustable after construction, one per wrapper around logf()."""
        check_caller_depth(value)
        self._caller_depth = value

    def enabled(self, level: Level) -> bool:
        return level >= self._min_level or level.is_terminal

    # ── Logging ──────────────────────────────────────────────────

    def logf(self, fmt: str, *args: Any) -> None:
        """
        Log a printf-style message. A leading "LEVEL " or "[LEVEL] " tag
        selects the level; untagged messages are INFO.
        """
        self._log(_FACADE_FRAMES + self._caller_depth, fmt, args)

    def _log(self, depth: int, fmt: str, args: tuple) -> None:
        with self._lock:
            level, message = classify(interpolate(fmt, args))
            if not self.enabled(level):
                return
            caller = EMPTY_CALLER
            if self._template.uses_caller:
                caller = resolve_caller(depth, self._resolver)
            record = LogRecord(
                timestamp=self.now(),
                level=level,
                message=strip_newline(message),
                caller=caller,
            )
            self._router.route(record, self._template.render(record))

        if level.is_terminal:
            self.fatal()

    def __repr__(self) -> str:
        return (
            f"Logger(min_level={self._min_level.name}, "
            f"template={self._template.source!r}, caller_depth={self._caller_depth})"
        )


def interpolate(fmt: str, args: tuple) -> str:
    """printf-style '%' formatting that degrades instead of raising."""
    if not isinstance(fmt, str):
        fmt = str(fmt)
    if not args:
        return fmt
    # Same convention as stdlib logging: a lone mapping feeds %(name)s fields
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return fmt % args
    except Exception:
        # Includes errors raised by the arguments' own __str__/__repr__
        return f"{fmt} %!(BADFORMAT {_describe(args)})"


def _describe(args: Any) -> str:
    """repr() of the arguments, or their type names when repr() itself fails."""
    try:
        return repr(args)
    except Exception:
        if isinstance(args, Mapping):
            return "{" + ", ".join(
                f"{_type_name(k) if not isinstance(k, str) else k}: {_type_name(v)}"
                for k, v in args.items()
            ) + "}"
        names = [_type_name(a) for a in args]
        return "(" + ", ".join(names) + ("," if len(names) == 1 else "") + ")"


def _type_name(obj: Any) -> str:
    return f"<{type(obj).__name__}>"


def exit_process() -> None:
    """Default fatal action: flush the standard streams and exit with status 1."""
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError, AttributeError):
            pass
    os._exit(1)
