"""
Log records and level definitions.

Seven fixed severities, totally ordered. Numeric values line up with the
standard library's logging levels so records can be bridged into it.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class Level(IntEnum):
    """Severity of a log call, lowest to highest."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    PANIC = 45       # Terminal: stack dump + fatal action
    FATAL = 50       # Terminal: same as PANIC, different label

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Resolve level from string name, case-insensitive. WARNING == WARN."""
        name_upper = name.upper()
        if name_upper == "WARNING":
            name_upper = "WARN"
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )

    @classmethod
    def from_value(cls, value: "int | str | Level") -> "Level":
        """Resolve level from int or string."""
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(
                    f"No level with value {value}. "
                    f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
                )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")

    @property
    def is_terminal(self) -> bool:
        return self >= Level.PANIC


# Longest label; every rendered level is padded to this width
LEVEL_WIDTH: int = max(len(member.name) for member in Level)


@dataclass(frozen=True)
class CallerInfo:
    """Call-site location. All fields empty when the frame cannot be resolved."""
    file: str = ""
    line: int | None = None
    function: str = ""
    package: str = ""

    @property
    def resolved(self) -> bool:
        return self.line is not None


EMPTY_CALLER = CallerInfo()


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable per-call record. Built by Logger.logf(), consumed by the
    template and the router, then dropped.
    """
    timestamp: datetime
    level: Level
    message: str
    caller: CallerInfo = EMPTY_CALLER

    @property
    def level_name(self) -> str:
        return self.level.name
