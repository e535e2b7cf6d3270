"""
Stream routing.

Two fixed destinations:
1. primary: every emitted line
2. secondary: the same line again when level >= ERROR
PANIC/FATAL additionally append a stack dump of all threads to the secondary
stream. Write failures are swallowed: logging never fails the caller.
"""

import io
import sys
import threading
import traceback
from typing import Any

from taglog.records import Level, LogRecord

# Lines at or above this level are duplicated to the secondary stream
SECONDARY_THRESHOLD = Level.ERROR


class Sink:
    """
    Borrowed writable destination. Text streams get str, binary streams get
    UTF-8 bytes; which one is decided once, at construction.
    """

    def __init__(self, stream: Any):
        if not callable(getattr(stream, "write", None)):
            raise TypeError(f"Sink needs a writable stream, got {type(stream).__name__}")
        self.stream = stream
        self.binary = _is_binary(stream)
        self._flush = getattr(stream, "flush", None)

    def write(self, text: str) -> bool:
        """Write and flush. Returns False (never raises) on failure."""
        try:
            self.stream.write(text.encode("utf-8") if self.binary else text)
            if self._flush is not None:
                self._flush()
        except Exception:
            # Never let a broken sink crash the caller
            return False
        return True

    def __repr__(self) -> str:
        return f"Sink({self.stream!r}, binary={self.binary})"


def _is_binary(stream: Any) -> bool:
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    if isinstance(stream, io.TextIOBase):
        return False
    return "b" in getattr(stream, "mode", "")


class StreamRouter:
    """Writes rendered lines to primary/secondary sinks by level."""

    def __init__(self, primary: Sink, secondary: Sink):
        self.primary = primary
        self.secondary = secondary

    def targets(self, level: Level) -> list[Sink]:
        """Sinks a line of this level goes to, each exactly once."""
        if level >= SECONDARY_THRESHOLD and self.secondary.stream is not self.primary.stream:
            return [self.primary, self.secondary]
        return [self.primary]

    def route(self, record: LogRecord, line: str) -> None:
        for sink in self.targets(record.level):
            sink.write(line)
        if record.level.is_terminal:
            self.secondary.write(stack_dump())


def stack_dump() -> str:
    """Stacks of all live threads, current thread first."""
    current = threading.get_ident()
    frames = sys._current_frames()
    names = {t.ident: t.name for t in threading.enumerate()}

    order = [current] + sorted(ident for ident in frames if ident != current)
    chunks = []
    for ident in order:
        frame = frames.get(ident)
        if frame is None:
            continue
        marker = " [current]" if ident == current else ""
        chunks.append(f"Thread {names.get(ident, '?')} ({ident}){marker}:\n")
        chunks.append("".join(traceback.format_stack(frame)))
        chunks.append("\n")
    return "".join(chunks)
