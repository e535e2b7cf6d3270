"""
Construction options.

Logger(*options) applies each option, in order, to a fresh Settings. Later
options override earlier ones:

    log = Logger(DEBUG, MSEC, CALLER_FILE, out(buf), caller_depth(1))

Flag options are module constants; parameterized ones are factories.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from taglog.caller import CallerResolver
from taglog.formatters import Preset
from taglog.records import Level


@dataclass
class Settings:
    """Mutable while options are applied; the Logger copies what it needs."""
    min_level: Level = Level.INFO
    template: Preset | str | None = None    # None → built from the flags below
    msec: bool = False
    level_braces: bool = False
    caller_file: bool = False
    caller_func: bool = False
    caller_pkg: bool = False
    caller_depth: int = 0
    out: Any = None                         # None → sys.stdout at construction
    err: Any = None                         # None → sys.stderr at construction
    clock: Callable[[], datetime] | None = None
    fatal_action: Callable[[], None] | None = None
    caller_resolver: CallerResolver | None = None  # None → frame introspection


Option = Callable[[Settings], None]


def apply_options(options: tuple[Option, ...] | list[Option]) -> Settings:
    settings = Settings()
    for opt in options:
        if not callable(opt):
            raise TypeError(f"Option must be callable, got {type(opt).__name__}")
        opt(settings)
    return settings


# ── Flag options ─────────────────────────────────────────────────────

def DEBUG(s: Settings) -> None:
    """Emit DEBUG (TRACE stays suppressed)."""
    s.min_level = Level.DEBUG


def TRACE(s: Settings) -> None:
    """Emit TRACE and DEBUG."""
    s.min_level = Level.TRACE


def MSEC(s: Settings) -> None:
    s.msec = True


def LEVEL_BRACES(s: Settings) -> None:
    s.level_braces = True


def CALLER_FILE(s: Settings) -> None:
    s.caller_file = True


def CALLER_FUNC(s: Settings) -> None:
    s.caller_func = True


def CALLER_PKG(s: Settings) -> None:
    s.caller_pkg = True


# ── Parameterized options ────────────────────────────────────────────

def level(value: Level | int | str) -> Option:
    """Minimum level to emit. PANIC and FATAL are never suppressed."""
    lvl = Level.from_value(value)

    def _apply(s: Settings) -> None:
        s.min_level = lvl
    return _apply


def template(source: Preset | str) -> Option:
    """A Preset or a literal template string. Compiled at construction."""
    if not isinstance(source, (Preset, str)):
        raise TypeError(f"Expected Preset or str, got {type(source).__name__}")

    def _apply(s: Settings) -> None:
        s.template = source
    return _apply


def out(stream: Any) -> Option:
    """Primary stream."""
    def _apply(s: Settings) -> None:
        s.out = stream
    return _apply


def err(stream: Any) -> Option:
    """Secondary stream, for ERROR and above."""
    def _apply(s: Settings) -> None:
        s.err = stream
    return _apply


def caller_depth(depth: int) -> Option:
    """Extra frames to skip, one per wrapper between call site and logf()."""
    check_caller_depth(depth)

    def _apply(s: Settings) -> None:
        s.caller_depth = depth
    return _apply


def clock(fn: Callable[[], datetime]) -> Option:
    def _apply(s: Settings) -> None:
        s.clock = fn
    return _apply


def fatal_action(fn: Callable[[], None]) -> Option:
    """Run on PANIC/FATAL instead of terminating the process."""
    def _apply(s: Settings) -> None:
        s.fatal_action = fn
    return _apply


def caller_resolver(resolver: CallerResolver) -> Option:
    """Replace the frame-walking resolver used for the caller_* fields."""
    if not isinstance(resolver, CallerResolver):
        raise TypeError(f"Expected a CallerResolver, got {type(resolver).__name__}")

    def _apply(s: Settings) -> None:
        s.caller_resolver = resolver
    return _apply


def check_caller_depth(depth: int) -> None:
    # bool is an int subclass but never a meaningful depth
    if not isinstance(depth, int) or isinstance(depth, bool):
        raise TypeError(f"caller_depth must be an int, got {type(depth).__name__}")
    if depth < 0:
        raise ValueError(f"caller_depth must be >= 0, got {depth}")
