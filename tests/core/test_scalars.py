from __future__ import annotations

from datetime import UTC, datetime

import pytest

from mcp_ar_report_server.core.models import ZERO_TIME
from mcp_ar_report_server.core.report.scalars import (
    TIMESTAMP_FORMATS,
    duration_to_ms,
    is_zero_time,
    parse_float,
    parse_int,
    parse_percent,
    parse_timestamp,
    seconds_to_ms,
    try_int,
)


def test_parse_int_strips_commas_and_whitespace() -> None:
    assert parse_int("1,234,567") == 1234567
    assert parse_int("  42  ") == 42
    assert parse_int("not a number") == 0
    assert parse_int("") == 0


def test_try_int_is_strict() -> None:
    assert try_int("12") == 12
    assert try_int("-3") == -3
    assert try_int("1.5") is None
    assert try_int("1,000") is None
    assert try_int("") is None


def test_parse_float_maps_nan_and_garbage_to_zero() -> None:
    assert parse_float("6.169") == pytest.approx(6.169)
    assert parse_float("NaN") == 0.0
    assert parse_float("inf") == 0.0
    assert parse_float("abc") == 0.0


def test_parse_percent() -> None:
    assert parse_percent("60.71%") == pytest.approx(60.71)
    assert parse_percent(" 0.02% ") == pytest.approx(0.02)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("0.122", 122),
        ("0.000", 0),
        ("1.500", 1500),
        ("0.001", 1),
        ("10.162", 10162),
        ("0.0005", 1),
        ("garbage", 0),
        ("", 0),
    ],
)
def test_seconds_to_ms_rounds_to_nearest(raw: str, expected: int) -> None:
    assert seconds_to_ms(raw) == expected


def test_duration_to_ms() -> None:
    assert duration_to_ms("8h 30m 45s") == (8 * 3600 + 30 * 60 + 45) * 1000
    assert duration_to_ms("4h 0m 0s") == 4 * 3600 * 1000
    assert duration_to_ms("250ms") == 250
    assert duration_to_ms("1s 500ms") == 1500
    assert duration_to_ms("") == 0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Mon Nov 24 2025 14:47:03.770", datetime(2025, 11, 24, 14, 47, 3, 770000, tzinfo=UTC)),
        ("Mon Nov 24 2025 14:47:03", datetime(2025, 11, 24, 14, 47, 3, tzinfo=UTC)),
        ("2026-02-03 10:05:00.250", datetime(2026, 2, 3, 10, 5, 0, 250000, tzinfo=UTC)),
        ("2026-02-03 10:05:00", datetime(2026, 2, 3, 10, 5, tzinfo=UTC)),
        ("2026/02/03 10:05:00", datetime(2026, 2, 3, 10, 5, tzinfo=UTC)),
        ("02/03/2026 10:05:00", datetime(2026, 2, 3, 10, 5, tzinfo=UTC)),
    ],
)
def test_parse_timestamp_layouts(raw: str, expected: datetime) -> None:
    assert parse_timestamp(raw) == expected


def test_every_timestamp_layout_is_covered() -> None:
    assert len(TIMESTAMP_FORMATS) == 6


def test_parse_timestamp_invalid_is_zero_time() -> None:
    assert parse_timestamp("garbage") == ZERO_TIME
    assert is_zero_time(parse_timestamp(""))
