"""
Line templates.

A template is a str.format-style pattern over a closed set of fields:

    {dt:<strftime>}   record timestamp; %L adds milliseconds (3 digits)
    {level}           level label padded to LEVEL_WIDTH; "[{level}]" pads the bracketed label
    {message}         interpolated message
    {caller_file}     pkg/file.py
    {caller_line}     line number
    {caller_func}     pkg.Class.method
    {caller_pkg}      pkg

Templates compile once into a list of segment renderers. Anything outside
the vocabulary fails at compile time with TemplateError, never per call.
"""

from __future__ import annotations

import re
from enum import Enum
from string import Formatter
from typing import TYPE_CHECKING, Callable

from taglog.records import Level, LogRecord, LEVEL_WIDTH

if TYPE_CHECKING:
    from taglog.options import Settings


DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
DATE_FORMAT_MSEC = "%Y/%m/%d %H:%M:%S.%L"

CALLER_FIELDS = frozenset({"caller_file", "caller_line", "caller_func", "caller_pkg"})
FIELDS = frozenset({"dt", "level", "message"}) | CALLER_FIELDS


class TemplateError(ValueError):
    """Template cannot be compiled."""


class Preset(str, Enum):
    """Named templates selectable by configuration."""
    SHORT = f"{{dt:{DATE_FORMAT}}} {{level}} {{message}}"
    WITH_MSEC = f"{{dt:{DATE_FORMAT_MSEC}}} {{level}} {{message}}"
    WITH_PKG = f"{{dt:{DATE_FORMAT_MSEC}}} {{level}} ({{caller_pkg}}) {{message}}"
    SHORT_DEBUG = f"{{dt:{DATE_FORMAT_MSEC}}} {{level}} ({{caller_file}}:{{caller_line}}) {{message}}"
    FUNC_DEBUG = f"{{dt:{DATE_FORMAT_MSEC}}} {{level}} ({{caller_func}}) {{message}}"
    FULL_DEBUG = (
        f"{{dt:{DATE_FORMAT_MSEC}}} {{level}} "
        f"({{caller_file}}:{{caller_line}} {{caller_func}}) {{message}}"
    )

    @classmethod
    def from_name(cls, name: str) -> "Preset":
        """'full_debug', 'FULL_DEBUG', 'full-debug' → Preset.FULL_DEBUG."""
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(
                f"Unknown template preset '{name}'. "
                f"Valid presets: {', '.join(m.name.lower() for m in cls)}"
            )


Segment = Callable[[LogRecord], str]

_PERCENT_RE = re.compile(r"(%%|%L)")

_PADDED = {lvl: lvl.name.ljust(LEVEL_WIDTH) for lvl in Level}
_PADDED_BRACED = {lvl: f"[{lvl.name}]".ljust(LEVEL_WIDTH + 2) for lvl in Level}


class Template:
    """Compiled template. Immutable; safe to share across threads."""

    def __init__(self, source: str, level_braces: bool = False):
        self.source = source
        self.level_braces = level_braces
        self.fields: frozenset[str] = frozenset()
        self._segments: tuple[Segment, ...] = ()
        self._compile()

    @property
    def uses_caller(self) -> bool:
        """True if rendering needs caller info (and so a stack walk)."""
        return bool(self.fields & CALLER_FIELDS)

    def render(self, record: LogRecord) -> str:
        """Render one line, terminated by exactly one newline."""
        return "".join(seg(record) for seg in self._segments) + "\n"

    def _compile(self) -> None:
        try:
            parsed = list(Formatter().parse(self.source))
        except ValueError as e:
            raise TemplateError(f"Malformed template {self.source!r}: {e}") from e

        # Flatten into literals (str) and [name, spec, braced] field entries
        tokens: list[str | list] = []
        for literal, name, spec, conversion in parsed:
            if literal:
                tokens.append(literal)
            if name is None:
                continue
            if name not in FIELDS:
                raise TemplateError(
                    f"Unknown field {{{name}}} in template {self.source!r}. "
                    f"Valid fields: {', '.join(sorted(FIELDS))}"
                )
            if conversion is not None:
                raise TemplateError(
                    f"Conversion '!{conversion}' not supported in template {self.source!r}"
                )
            tokens.append([name, spec or "", False])

        # "[{level}]" folds the brackets into the padded level label
        for i, tok in enumerate(tokens):
            if not (isinstance(tok, list) and tok[0] == "level" and not tok[1]):
                continue
            if 0 < i < len(tokens) - 1:
                before, after = tokens[i - 1], tokens[i + 1]
                if (isinstance(before, str) and before.endswith("[")
                        and isinstance(after, str) and after.startswith("]")):
                    tokens[i - 1] = before[:-1]
                    tokens[i + 1] = after[1:]
                    tok[2] = True

        # LEVEL_BRACES brackets the first plain {level} unless one already is
        levels = [t for t in tokens if isinstance(t, list) and t[0] == "level"]
        if self.level_braces and not any(t[2] for t in levels):
            plain = [t for t in levels if not t[1]]
            if plain:
                plain[0][2] = True

        segments: list[Segment] = []
        fields = set()
        for tok in tokens:
            if isinstance(tok, str):
                if tok:
                    segments.append(_literal(tok))
                continue
            name, spec, braced = tok
            fields.add(name)
            segments.append(_field_segment(name, spec, braced, self.source))

        self.fields = frozenset(fields)
        self._segments = tuple(segments)

    def __repr__(self) -> str:
        if self.level_braces:
            return f"Template({self.source!r}, level_braces=True)"
        return f"Template({self.source!r})"


def compile_template(source: str | Preset, level_braces: bool = False) -> Template:
    """Compile a preset or a literal template string."""
    if isinstance(source, Preset):
        return Template(source.value, level_braces)
    if not isinstance(source, str):
        raise TemplateError(f"Expected template string, got {type(source).__name__}")
    return Template(source, level_braces)


def template_from_options(settings: Settings) -> str:
    """Build the template implied by the MSEC / LEVEL_BRACES / CALLER_* flags."""
    date_format = DATE_FORMAT_MSEC if settings.msec else DATE_FORMAT
    level = "[{level}]" if settings.level_braces else "{level}"

    caller = []
    if settings.caller_file:
        caller.append("{caller_file}:{caller_line}")
    if settings.caller_func:
        caller.append("{caller_func}")
    if settings.caller_pkg:
        caller.append("{caller_pkg}")

    parts = [f"{{dt:{date_format}}}", level]
    if caller:
        parts.append(f"({' '.join(caller)})")
    parts.append("{message}")
    return " ".join(parts)


def resolve_template(settings: Settings) -> str:
    """
    Template source for a Logger: explicit template, else built from flags.
    LEVEL_BRACES on an explicit template is applied at compile time.
    """
    if settings.template is None:
        return template_from_options(settings)

    source = settings.template
    if isinstance(source, Preset):
        return source.value
    return source


# ── Segment builders ─────────────────────────────────────────────────

def _literal(text: str) -> Segment:
    return lambda record: text


def _field_segment(name: str, spec: str, braced: bool, source: str) -> Segment:
    if name == "dt":
        return _dt_segment(spec or DATE_FORMAT)
    if name == "level":
        if braced:
            return lambda record: _PADDED_BRACED[record.level]
        if spec:
            _check_spec(spec, "INFO", source)
            return lambda record: format(record.level.name, spec)
        return lambda record: _PADDED[record.level]
    if name == "message":
        if spec:
            _check_spec(spec, "", source)
            return lambda record: format(record.message, spec)
        return lambda record: record.message
    if name == "caller_line":
        if spec:
            _check_spec(spec, 0, source)
            return lambda record: (
                "" if record.caller.line is None else format(record.caller.line, spec)
            )
        return lambda record: "" if record.caller.line is None else str(record.caller.line)

    attr = {
        "caller_file": "file",
        "caller_func": "function",
        "caller_pkg": "package",
    }[name]
    if spec:
        _check_spec(spec, "", source)
        return lambda record: format(getattr(record.caller, attr), spec)
    return lambda record: getattr(record.caller, attr)


def _dt_segment(date_format: str) -> Segment:
    # %L is not a strftime directive; split around the unescaped ones and
    # splice milliseconds in. "%%" pairs stay with strftime, so "%%L" is "%L".
    pieces = [""]
    for token in _PERCENT_RE.split(date_format):
        if token == "%L":
            pieces.append("")
        else:
            pieces[-1] += token
    if len(pieces) == 1:
        return lambda record: record.timestamp.strftime(date_format)

    def render(record: LogRecord) -> str:
        ts = record.timestamp
        return f"{ts.microsecond // 1000:03d}".join(ts.strftime(p) for p in pieces)

    return render


def _check_spec(spec: str, sample: object, source: str) -> None:
    try:
        format(sample, spec)
    except (ValueError, TypeError) as e:
        raise TemplateError(f"Bad format spec ':{spec}' in template {source!r}: {e}") from e
