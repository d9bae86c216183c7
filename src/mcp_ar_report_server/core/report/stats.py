"""Key/value sections: general statistics and distribution counts."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from typing import Any

from ..models import GeneralStatistics
from .scalars import parse_int, parse_timestamp, try_int

_SEPARATOR_RE = re.compile(r"^-{3,}$")

_StatRule = tuple[str, Callable[[str], bool], Callable[[str], Any]]


def _has(*words: str) -> Callable[[str], bool]:
    return lambda key: all(w in key for w in words)


def _without(match: Callable[[str], bool], *words: str) -> Callable[[str], bool]:
    return lambda key: match(key) and not any(w in key for w in words)


def _either(*matches: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda key: any(m(key) for m in matches)


def _is(name: str) -> Callable[[str], bool]:
    return lambda key: key == name


def _raw(value: str) -> str:
    return value


# v3 and v4 spell most keys differently ("API Calls" vs "API Count",
# "Log Start" vs "Start Time"). First matching rule wins.
_GENERAL_RULES: tuple[_StatRule, ...] = (
    ("total_lines", _has("total line"), parse_int),
    ("api_count", _without(_has("api"), "exception", "thread"), parse_int),
    ("sql_count", _without(_has("sql"), "exception", "thread"), parse_int),
    ("filter_count", _without(_has("filter"), "thread"), parse_int),
    (
        "esc_count",
        _without(_either(_has("escalation"), _is("esc count")), "thread", "exception"),
        parse_int,
    ),
    ("unique_users", _either(_has("unique user"), _is("user count")), parse_int),
    ("unique_forms", _either(_has("unique form"), _is("form count")), parse_int),
    ("unique_tables", _either(_has("unique table"), _is("table count")), parse_int),
    ("log_start", _either(_has("log start"), _is("start time")), parse_timestamp),
    ("log_end", _either(_has("log end"), _is("end time")), parse_timestamp),
    ("log_duration", _either(_has("log duration"), _has("elapsed")), _raw),
)


def content_lines(lines: Iterable[str]) -> Iterable[str]:
    """Trimmed lines, minus blanks and ``---`` rules."""
    for line in lines:
        line = line.strip()
        if line and not _SEPARATOR_RE.match(line):
            yield line


def split_key_value(line: str) -> tuple[str, str] | None:
    """Split ``Key: Value`` on the first colon. The key must be non-empty."""
    key, sep, value = line.partition(":")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip()


def split_key_count(line: str) -> tuple[str, int] | None:
    """Split ``Key: <int>`` where the key itself may contain colons.

    Uses the last colon whose right-hand side is an integer (commas allowed),
    so ``HPD:Help Desk:  5,000`` yields ``("HPD:Help Desk", 5000)``. Falls back
    to ``Key<TAB><int>``.
    """
    i = line.rfind(":")
    while i >= 0:
        count = try_int(line[i + 1 :].strip().replace(",", ""))
        key = line[:i].strip()
        if count is not None and key:
            return key, count
        i = line.rfind(":", 0, i)

    key, tab, value = line.partition("\t")
    if tab:
        key = key.strip()
        count = try_int(value.strip().replace(",", ""))
        if count is not None and key:
            return key, count
    return None


def parse_general_statistics(
    lines: Sequence[str],
    base: GeneralStatistics | None = None,
) -> GeneralStatistics:
    """Fold ``Key: Value`` lines into ``base`` (or a fresh record).

    Unrecognized keys are ignored.
    """
    updates: dict[str, Any] = {}
    for line in content_lines(lines):
        kv = split_key_value(line)
        if kv is None:
            continue
        key, value = kv
        key = key.lower()
        for field_name, matches, convert in _GENERAL_RULES:
            if matches(key):
                updates[field_name] = convert(value)
                break
    return replace(base or GeneralStatistics(), **updates)


def parse_distribution(lines: Sequence[str]) -> dict[str, int]:
    """Parse a ``category: count`` list, dropping non-positive counts."""
    dist: dict[str, int] = {}
    for line in content_lines(lines):
        kv = split_key_count(line)
        if kv is not None and kv[1] > 0:
            dist[kv[0]] = kv[1]
    return dist
