from __future__ import annotations

from mcp_ar_report_server.core.models import GeneralStatistics
from mcp_ar_report_server.core.report.scalars import is_zero_time
from mcp_ar_report_server.core.report.stats import (
    parse_distribution,
    parse_general_statistics,
    split_key_count,
    split_key_value,
)


def test_split_key_value_uses_first_colon() -> None:
    assert split_key_value("Start Time: Mon Nov 24 2025 14:46:58.505") == (
        "Start Time",
        "Mon Nov 24 2025 14:46:58.505",
    )
    assert split_key_value(": orphan") is None
    assert split_key_value("no colon here") is None


def test_split_key_count() -> None:
    assert split_key_count("HPD:Help Desk:  5000") == ("HPD:Help Desk", 5000)
    assert split_key_count("Demo:  1,234") == ("Demo", 1234)
    assert split_key_count("Demo\t100") == ("Demo", 100)
    assert split_key_count("Demo:  abc") is None
    assert split_key_count(":") is None


def test_parse_general_statistics_v4_preamble(load_lines) -> None:
    stats = parse_general_statistics(load_lines("v4_preamble.txt"))

    assert stats.total_lines == 16880
    assert stats.api_count == 251
    assert stats.sql_count == 7307
    assert stats.esc_count == 6260
    assert stats.unique_forms == 32
    assert stats.unique_tables == 60
    assert stats.unique_users == 8
    assert stats.log_duration == "10.162"
    assert not is_zero_time(stats.log_start)
    assert not is_zero_time(stats.log_end)
    assert stats.log_start < stats.log_end


def test_parse_general_statistics_ignores_thread_and_exception_counts() -> None:
    stats = parse_general_statistics(
        [
            "API Count: 10",
            "API Exception Count: 3",
            "SQL Exception Count: 1",
            "Escalation Thread Count: 2",
        ]
    )
    assert stats.api_count == 10
    assert stats.sql_count == 0
    assert stats.esc_count == 0


def test_parse_general_statistics_v3_keys() -> None:
    stats = parse_general_statistics(
        [
            "Total Lines Processed:  50000",
            "API Calls:              30000",
            "SQL Operations:         15000",
            "Filter Executions:      1200",
            "Escalations:            7",
            "Unique Users:           10",
            "Log Start:  2026-02-03 10:00:00",
            "Log Duration:  4h 0m 0s",
            "---",
            "Something Else: 5",
        ]
    )
    assert stats.total_lines == 50000
    assert stats.api_count == 30000
    assert stats.sql_count == 15000
    assert stats.filter_count == 1200
    assert stats.esc_count == 7
    assert stats.unique_users == 10
    assert stats.log_start.hour == 10
    assert stats.log_duration == "4h 0m 0s"


def test_parse_general_statistics_merges_into_base() -> None:
    base = GeneralStatistics(total_lines=100, api_count=50)
    stats = parse_general_statistics(["SQL Count: 7"], base)
    assert stats.total_lines == 100
    assert stats.api_count == 50
    assert stats.sql_count == 7
    assert base.sql_count == 0


def test_parse_distribution_drops_non_positive_and_separators() -> None:
    dist = parse_distribution(["", "---", "T001:  25000", "T002:  15,000", "T003:  0", "junk"])
    assert dist == {"T001": 25000, "T002": 15000}
