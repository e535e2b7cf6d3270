"""
Caller resolution.

Walks up the interpreter stack to the frame that issued the log call and
reports where it is: short file path, line, qualified function, package.

Skip depth counts frames upward from the function that calls
resolve_caller(): 0 is that function, 1 its caller, and so on. The Logger
passes 2 (its private _log() and public logf()) plus the user's caller_depth,
so a wrapper around logf() is compensated by caller_depth=1.
"""

import sys
from pathlib import PurePath
from typing import Protocol, runtime_checkable

from taglog.records import CallerInfo, EMPTY_CALLER


@runtime_checkable
class CallerResolver(Protocol):
    """Anything able to map a skip depth to a call-site location."""

    def resolve(self, skip: int) -> CallerInfo: ...


class FrameCallerResolver:
    """CallerResolver backed by CPython frame introspection."""

    def resolve(self, skip: int) -> CallerInfo:
        try:
            # +2: this method and resolve_caller() are not part of the skip count
            frame = sys._getframe(skip + 2)
        except ValueError:
            # Stack shallower than requested
            return EMPTY_CALLER
        return caller_from_frame(frame)


def caller_from_frame(frame) -> CallerInfo:
    code = frame.f_code
    module = frame.f_globals.get("__name__") or ""
    package = module.rpartition(".")[2]
    qualname = getattr(code, "co_qualname", code.co_name)
    return CallerInfo(
        file=short_path(code.co_filename),
        line=frame.f_lineno,
        function=f"{package}.{qualname}" if package else qualname,
        package=package,
    )


def short_path(path: str) -> str:
    """'/a/b/pkg/mod.py' → 'pkg/mod.py'."""
    p = PurePath(path)
    if p.parent.name:
        return f"{p.parent.name}/{p.name}"
    return p.name


_default_resolver = FrameCallerResolver()


def resolve_caller(skip: int, resolver: CallerResolver | None = None) -> CallerInfo:
    """Locate the frame `skip` levels above the function calling this one."""
    if skip < 0:
        raise ValueError(f"skip must be >= 0, got {skip}")
    return (resolver or _default_resolver).resolve(skip)
