"""Split a report into named sections.

Three header styles are recognized, tried in this order:

- ``=== Name ===`` (v3)
- ``###  SECTION: Name  #####`` (v4 major section)
- ``### Name`` (v4 subsection)

Text before the first header is kept under ``PREAMBLE_SECTION``; v4 reports
print their general statistics there.
"""

from __future__ import annotations

import re

PREAMBLE_SECTION = "_preamble"

_HEADER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^={3,}\s*(.+?)\s*={3,}$"),
    re.compile(r"^#{3,}\s+SECTION:\s*(.+?)\s*#{3,}"),
    re.compile(r"^###\s+(.+)$"),
)


def match_header(line: str) -> str | None:
    """Return the section name if ``line`` is a header, else None."""
    for pattern in _HEADER_PATTERNS:
        m = pattern.match(line)
        if m:
            return m.group(1)
    return None


def split_sections(text: str) -> dict[str, list[str]]:
    """Partition ``text`` into ``{section name: body lines}``.

    Bodies keep their lines verbatim (blank lines included). A repeated
    section name keeps the last body seen.
    """
    sections: dict[str, list[str]] = {}
    current: str | None = None
    body: list[str] = []

    for raw in text.split("\n"):
        line = raw.removesuffix("\r")
        name = match_header(line)
        if name is None:
            body.append(line)
            continue
        if current is not None:
            sections[current] = body
        elif body:
            sections[PREAMBLE_SECTION] = body
        current = name
        body = []

    if current is not None:
        sections[current] = body
    elif body:
        sections[PREAMBLE_SECTION] = body
    return sections
