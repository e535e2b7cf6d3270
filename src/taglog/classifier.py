"""
Severity classification from free text.

A call carries its severity as a leading tag in the message itself:

    "INFO something happened"      → INFO,  "something happened"
    "[ERROR] disk full"            → ERROR, "disk full"
    "nothing special"              → INFO,  "nothing special"

Tags are case-sensitive and only recognized at the very start of the line.
A bare tag must be a whole word, so "INFORMATION" or "DEBUGGING" are plain
text. Anything unrecognized defaults to INFO.
"""

import re

from taglog.records import Level

_NAMES = "|".join(member.name for member in Level)

_TAG_RE = re.compile(
    rf"^(?:\[(?P<bracketed>{_NAMES})\]|(?P<bare>{_NAMES})(?=\s|$))\s*"
)


def classify(line: str) -> tuple[Level, str]:
    """Return (level, line with the tag and following whitespace removed)."""
    m = _TAG_RE.match(line)
    if m is None:
        return Level.INFO, line
    name = m.group("bracketed") or m.group("bare")
    return Level[name], line[m.end():]


def strip_newline(message: str) -> str:
    """Drop a single trailing newline; the renderer always appends its own."""
    if message.endswith("\n"):
        return message[:-1]
    return message
