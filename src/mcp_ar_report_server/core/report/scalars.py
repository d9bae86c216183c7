"""Lenient scalar parsing for report cells.

None of these helpers raise: malformed input yields the zero value.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime

from ..models import ZERO_TIME

# Tried in order, first match wins.
TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%a %b %d %Y %H:%M:%S.%f",
    "%a %b %d %Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_DURATION_TOKEN_RE = re.compile(r"(\d+)\s*(ms|h|m|s)")
_DURATION_UNIT_MS = {"h": 3_600_000, "m": 60_000, "s": 1_000, "ms": 1}


def try_int(value: str) -> int | None:
    """Strictly parse a base-10 integer, or return None."""
    value = value.strip()
    if not _INT_RE.match(value):
        return None
    return int(value)


def parse_int(value: str) -> int:
    """Parse an integer, tolerating thousands separators. Returns 0 on failure."""
    out = try_int(value.replace(",", ""))
    return out if out is not None else 0


def parse_float(value: str) -> float:
    """Parse a float. ``NaN``, infinities and garbage all become 0.0."""
    value = value.strip()
    if not _FLOAT_RE.match(value):
        return 0.0
    out = float(value)
    return out if math.isfinite(out) else 0.0


def parse_percent(value: str) -> float:
    """Parse a literal percentage such as ``"60.71%"``."""
    return parse_float(value.strip().removesuffix("%"))


def seconds_to_ms(value: str) -> int:
    """Convert a float-seconds string (``"0.122"``) to whole milliseconds."""
    value = value.strip()
    if not _FLOAT_RE.match(value):
        return 0
    return int(float(value) * 1000 + 0.5)


def duration_to_ms(value: str) -> int:
    """Sum ``<number><unit>`` tokens (h, m, s, ms) of a duration like ``"8h 30m 45s"``."""
    total = 0
    for amount, unit in _DURATION_TOKEN_RE.findall(value):
        total += int(amount) * _DURATION_UNIT_MS[unit]
    return total


def try_parse_timestamp(value: str) -> datetime | None:
    """Parse a timestamp against the known layouts; None when nothing matches."""
    value = value.strip()
    if not value:
        return None
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
    return None


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp, returning ``ZERO_TIME`` on failure."""
    ts = try_parse_timestamp(value)
    return ts if ts is not None else ZERO_TIME


def is_zero_time(ts: datetime) -> bool:
    return ts == ZERO_TIME
