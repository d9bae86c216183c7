"""Top-N ("longest running") tables.

Three layouts are in the wild:

- pipe-delimited (v3): ``| Rank | Identifier | Duration(ms) | Status |``
- fixed-width (v4): dash-bounded columns, durations in float seconds, no rank
- whitespace-aligned (v3 fallback): columns separated by two or more spaces
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Any

from ..models import TopNEntry
from .scalars import parse_timestamp, seconds_to_ms, try_int, try_parse_timestamp
from .tables import (
    FixedWidthTable,
    HeaderMatcher,
    contains,
    equals,
    is_dash_separator,
)

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r"^-{3,}$")
_FIELD_SPLIT_RE = re.compile(r"\s{2,}")

# (header matcher, TopNEntry field, converter); first match wins per header.
_FieldRule = tuple[HeaderMatcher, str, Callable[[str], Any]]


class TableLayout(str, Enum):
    PIPE = "pipe"
    FIXED_WIDTH = "fixed_width"
    WHITESPACE = "whitespace"


def _atoi(value: str) -> int:
    out = try_int(value)
    return out if out is not None else 0


def _text(value: str) -> str:
    return value


def _is_ok(value: str) -> bool:
    return value.lower() in ("success", "ok")


def _is_true(value: str) -> bool:
    return value.lower() == "true"


def _is_ok_or_true(value: str) -> bool:
    return value.lower() in ("success", "ok", "true")


_PIPE_RULES: tuple[_FieldRule, ...] = (
    (equals("rank", "#"), "rank", _atoi),
    (contains("line"), "line_number", _atoi),
    (equals("file", "file#"), "file_number", _atoi),
    (
        lambda h: "time" in h and "duration" not in h and "queue" not in h,
        "timestamp",
        parse_timestamp,
    ),
    (contains("thread", "trace"), "trace_id", _text),
    (equals("rpc", "rpcid", "rpc id"), "rpc_id", _text),
    (equals("queue"), "queue", _text),
    (contains("identifier", "name", "api", "statement"), "identifier", _text),
    (equals("form"), "form", _text),
    (equals("user"), "user", _text),
    (contains("duration"), "duration_ms", _atoi),
    (lambda h: "queue" in h and "time" in h, "queue_time_ms", _atoi),
    (equals("status"), "success", _is_ok),
    (equals("details", "error"), "details", _text),
)

# "Last Line#" has no field of its own and is appended to details instead.
_FIXED_WIDTH_RULES: tuple[_FieldRule, ...] = (
    (equals("run time"), "duration_ms", seconds_to_ms),
    (equals("first line#", "line#"), "line_number", _atoi),
    (equals("trid"), "trace_id", _text),
    (equals("queue"), "queue", _text),
    (equals("api", "sql statement", "filter", "escalation"), "identifier", _text),
    (equals("form", "table"), "form", _text),
    (equals("pool"), "queue", _text),
    (equals("start time", "date/time"), "timestamp", parse_timestamp),
    (equals("q time"), "queue_time_ms", seconds_to_ms),
    (equals("success"), "success", _is_true),
    (equals("thread"), "trace_id", _text),
    (equals("line gap", "thread gap"), "duration_ms", seconds_to_ms),
    (equals("details", "error"), "details", _text),
    (equals("identifier", "name"), "identifier", _text),
    (contains("duration"), "duration_ms", _atoi),
    (equals("status"), "success", _is_ok_or_true),
    (equals("user"), "user", _text),
    (equals("file", "file#"), "file_number", _atoi),
)


def _apply_rules(fields: dict[str, Any], header: str, value: str, rules: Sequence[_FieldRule]) -> None:
    for matches, name, convert in rules:
        if matches(header):
            fields[name] = convert(value)
            return


def detect_layout(lines: Sequence[str]) -> TableLayout:
    """Pick the table layout; the first decisive line wins."""
    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith("|") and trimmed.count("|") >= 3:
            return TableLayout.PIPE
        if is_dash_separator(line) and " " in line:
            return TableLayout.FIXED_WIDTH
    return TableLayout.WHITESPACE


def parse_topn_section(lines: Sequence[str]) -> tuple[TopNEntry, ...]:
    layout = detect_layout(lines)
    logger.debug("Top-N table layout: %s", layout.value)
    if layout is TableLayout.PIPE:
        return parse_pipe_table(lines)
    if layout is TableLayout.FIXED_WIDTH:
        return parse_fixed_width_table(lines)
    return parse_whitespace_table(lines)


# --- pipe layout ---------------------------------------------------------


def split_pipe_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def is_separator_row(cells: Sequence[str]) -> bool:
    """True when every cell is made of dashes and colons (``|---|:--:|``)."""
    return all(not cell.replace("-", "").replace(":", "").strip() for cell in cells)


def parse_pipe_table(lines: Sequence[str]) -> tuple[TopNEntry, ...]:
    entries: list[TopNEntry] = []
    headers: list[str] | None = None
    for line in lines:
        trimmed = line.strip()
        if not trimmed or _SEPARATOR_RE.match(trimmed) or not trimmed.startswith("|"):
            continue
        cells = split_pipe_cells(trimmed)
        if is_separator_row(cells):
            continue
        if headers is None:
            headers = cells
            continue

        fields: dict[str, Any] = {}
        for header, value in zip(headers, cells):
            _apply_rules(fields, header.strip().lower(), value, _PIPE_RULES)
        entry = TopNEntry(**fields)
        if entry.rank > 0 or entry.identifier:
            entries.append(entry)
    return tuple(entries)


# --- fixed-width layout --------------------------------------------------


def _fixed_width_entry(headers: Sequence[str], values: Sequence[str]) -> TopNEntry:
    fields: dict[str, Any] = {}
    for header, value in zip(headers, values):
        if not value:
            continue
        h = header.strip().lower()
        if h == "last line#":
            previous = fields.get("details", "")
            note = f"last_line={value}"
            fields["details"] = f"{previous}; {note}" if previous else note
            continue
        _apply_rules(fields, h, value, _FIXED_WIDTH_RULES)
    return TopNEntry(**fields)


def parse_fixed_width_table(lines: Sequence[str]) -> tuple[TopNEntry, ...]:
    """Parse a v4 dash-bounded table; ranks are assigned in file order from 1."""
    table = FixedWidthTable.locate(lines)
    if table is None or len(table.bounds) < 2:
        return ()

    entries: list[TopNEntry] = []
    for line in lines[table.separator_index + 1 :]:
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.startswith(("===", "###")) or is_dash_separator(line):
            break
        # "No Queued API's" and the like
        if trimmed.startswith("No "):
            continue
        entry = _fixed_width_entry(table.headers, table.values(line))
        if entry.identifier or entry.duration_ms > 0 or entry.line_number > 0:
            entries.append(replace(entry, rank=len(entries) + 1))
    return tuple(entries)


# --- whitespace layout ---------------------------------------------------


def split_fields(line: str) -> list[str]:
    """Split on runs of two or more whitespace characters."""
    return [p.strip() for p in _FIELD_SPLIT_RE.split(line) if p.strip()]


def _find_timestamp(fields: Sequence[str], start: int) -> tuple[datetime | None, int]:
    """Search up to six fields from ``start`` for a timestamp.

    Multi-field windows are tried before the single field at each position,
    since a timestamp may have been split on its own double spaces. Returns
    ``(timestamp or None, next index)``.
    """
    n = len(fields)
    for i in range(start, min(n, start + 6)):
        for j in range(i + 1, min(n, i + 6)):
            ts = try_parse_timestamp(" ".join(fields[i : j + 1]))
            if ts is not None:
                return ts, j + 1
        ts = try_parse_timestamp(fields[i])
        if ts is not None:
            return ts, i + 1
    return None, start


def parse_topn_line(line: str) -> TopNEntry | None:
    """Parse one whitespace-aligned row, or None if it does not start with a rank.

    Columns are consumed positionally: rank, line#, optional file#, timestamp,
    trace id (only when it starts with "T"), rpc id, queue, identifier.
    The leftovers are classified by content: integers are the duration,
    status words set ``success``, and anything else fills form, user and
    then details.
    """
    fields = split_fields(line)
    if len(fields) < 6:
        return None
    rank = try_int(fields[0])
    if rank is None:
        return None

    out: dict[str, Any] = {"rank": rank}
    idx = 1
    out["line_number"] = _atoi(fields[idx])
    idx += 1

    file_number = try_int(fields[idx]) if idx < len(fields) else None
    if file_number is not None and 0 <= file_number < 1000:
        out["file_number"] = file_number
        idx += 1

    ts, idx = _find_timestamp(fields, idx)
    if ts is not None:
        out["timestamp"] = ts

    if idx < len(fields) and fields[idx].startswith("T"):
        out["trace_id"] = fields[idx]
        idx += 1
    for name in ("rpc_id", "queue", "identifier"):
        if idx < len(fields):
            out[name] = fields[idx]
            idx += 1

    details: list[str] = []
    for f in fields[idx:]:
        duration = try_int(f)
        if duration is not None and duration >= 0:
            out["duration_ms"] = duration
            continue
        word = f.lower()
        if word in ("success", "ok"):
            out["success"] = True
        elif word in ("fail", "failed", "error"):
            out["success"] = False
        elif "form" not in out:
            out["form"] = f
        elif "user" not in out:
            out["user"] = f
        else:
            details.append(f)
    out["details"] = " ".join(details)
    return TopNEntry(**out)


def parse_whitespace_table(lines: Sequence[str]) -> tuple[TopNEntry, ...]:
    entries: list[TopNEntry] = []
    for line in lines:
        trimmed = line.strip()
        if not trimmed or _SEPARATOR_RE.match(trimmed):
            continue
        entry = parse_topn_line(trimmed)
        if entry is not None:
            entries.append(entry)
    return tuple(entries)


def section_has_no_data(lines: Sequence[str]) -> bool:
    """True when the first non-blank line reads "No ..." / "None", or all lines are blank."""
    for line in lines:
        trimmed = line.strip()
        if trimmed:
            return trimmed.startswith(("No ", "None"))
    return True

