"""Fixed-width table engine.

Analyzer v4 tables are laid out like this::

        Run Time First Line# Last Line#                           TrID
    ------------ ----------- ---------- ------------------------------
           0.122        8620      10031 ppvN52iaQZmnf3QKV41xnA:0009991

Column boundaries come from the dash runs of the separator line, never from
the header, since headers and cells may both contain spaces.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass

Boundary = tuple[int, int]
HeaderMatcher = Callable[[str], bool]


def is_dash_separator(line: str) -> bool:
    """True for a line made only of dashes and spaces with a run of 3+ dashes."""
    trimmed = line.strip()
    if not trimmed:
        return False
    return "---" in trimmed and not trimmed.replace("-", "").replace(" ", "")


def is_equals_separator(line: str) -> bool:
    """True for a non-blank line made only of equals signs and spaces."""
    trimmed = line.strip()
    if not trimmed:
        return False
    return "=" in trimmed and not trimmed.replace("=", "").replace(" ", "")


def column_boundaries(separator: str) -> list[Boundary]:
    """Return ``[start, end)`` pairs, one per contiguous dash run."""
    bounds: list[Boundary] = []
    i, n = 0, len(separator)
    while i < n:
        while i < n and separator[i] != "-":
            i += 1
        start = i
        while i < n and separator[i] == "-":
            i += 1
        if i > start:
            bounds.append((start, i))
    return bounds


def column_values(line: str, bounds: Sequence[Boundary]) -> list[str]:
    """Slice ``line`` into trimmed cells; the last column runs to end of line."""
    values: list[str] = []
    last = len(bounds) - 1
    for i, (start, end) in enumerate(bounds):
        if i == last:
            end = max(end, len(line))
        values.append(line[start:end].strip())
    return values


def find_dash_separator(lines: Sequence[str]) -> int:
    """Index of the first dash separator line, or -1."""
    for i, line in enumerate(lines):
        if is_dash_separator(line):
            return i
    return -1


def equals(*names: str) -> HeaderMatcher:
    return lambda header: header in names


def contains(*fragments: str) -> HeaderMatcher:
    return lambda header: any(f in header for f in fragments)


def map_columns(
    headers: Sequence[str],
    rules: Sequence[tuple[str, HeaderMatcher]],
) -> dict[str, int]:
    """Map roles to column indexes.

    Each (lowercased) header takes the first role whose matcher accepts it.
    When several headers match one role, the rightmost wins.
    """
    columns: dict[str, int] = {}
    for i, header in enumerate(headers):
        h = header.strip().lower()
        for role, matches in rules:
            if matches(h):
                columns[role] = i
                break
    return columns


@dataclass(frozen=True, slots=True)
class FixedWidthTable:
    """A located table: header cells, column bounds and its position in the body."""

    headers: tuple[str, ...]
    bounds: tuple[Boundary, ...]
    separator_index: int

    @classmethod
    def locate(cls, lines: Sequence[str]) -> FixedWidthTable | None:
        """Find the first separator with a header line above it."""
        sep = find_dash_separator(lines)
        if sep < 1:
            return None
        bounds = tuple(column_boundaries(lines[sep]))
        headers = tuple(column_values(lines[sep - 1], bounds))
        return cls(headers=headers, bounds=bounds, separator_index=sep)

    def values(self, line: str) -> list[str]:
        return column_values(line, self.bounds)

    def rows(self, lines: Sequence[str]) -> Iterator[list[str]]:
        """Yield cell lists for data rows.

        Blank lines are skipped; iteration stops at the next dash or equals
        separator or ``###`` header.
        """
        for line in lines[self.separator_index + 1 :]:
            trimmed = line.strip()
            if not trimmed:
                continue
            if is_dash_separator(line) or is_equals_separator(line) or trimmed.startswith("###"):
                return
            yield self.values(line)


def cell(values: Sequence[str], columns: Mapping[str, int], role: str) -> str:
    """Cell for ``role``, or "" when the column is absent or the row is short."""
    idx = columns.get(role)
    if idx is None or idx >= len(values):
        return ""
    return values[idx]
