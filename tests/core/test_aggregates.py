from __future__ import annotations

import pytest

from mcp_ar_report_server.core.report.aggregates import parse_aggregate_table, sorted_by_from_name


def test_api_by_form_groups_and_totals(load_lines) -> None:
    table = parse_aggregate_table(load_lines("agg_api_by_form.txt"), sorted_by="descending AVG execution time")

    assert table is not None
    assert table.grouped_by == "Form"
    assert table.sorted_by == "descending AVG execution time"
    assert [g.entity_name for g in table.groups] == ["SRM:RequestApDetailSignature", "AP:Signature"]

    first, second = table.groups
    assert [r.operation_type for r in first.rows] == ["SE", "GS"]
    assert first.rows[0].ok == 1
    assert first.rows[0].total == 1
    assert first.rows[0].min_line == 8620
    assert first.rows[0].max_time == pytest.approx(0.122)
    assert first.subtotal is not None
    assert first.subtotal.total == 2
    assert first.subtotal.sum_time == pytest.approx(0.122)

    assert len(second.rows) == 5
    assert second.rows[1].operation_type == "GLEWF"
    assert second.rows[1].max_line == 10116
    assert second.rows[1].avg_time == pytest.approx(0.012)
    assert second.subtotal is not None
    assert second.subtotal.total == 9
    assert second.subtotal.sum_time == pytest.approx(0.098)

    assert table.grand_total is not None
    assert table.grand_total.ok == 11
    assert table.grand_total.total == 11
    assert table.grand_total.sum_time == pytest.approx(0.220)


def test_sql_by_table(load_lines) -> None:
    table = parse_aggregate_table(load_lines("agg_sql_by_table.txt"))

    assert table is not None
    assert table.grouped_by == "Table"
    assert [g.entity_name for g in table.groups] == ["T18", "T4382", "T384"]
    t384 = table.groups[2]
    assert [r.operation_type for r in t384.rows] == ["SELECT", "INSERT"]
    assert t384.subtotal is not None
    assert t384.subtotal.total == 3
    assert table.grand_total is not None
    assert table.grand_total.total == 10


def test_escalation_pool_uses_count_column(load_lines) -> None:
    table = parse_aggregate_table(load_lines("agg_esc_by_pool.txt"))

    assert table is not None
    assert table.grouped_by == "Pool"
    assert len(table.groups) == 1
    group = table.groups[0]
    assert group.entity_name == "6"
    assert group.rows[0].operation_type == "INTG:SMS-POOL_CALLAPI"
    assert group.rows[0].total == 1
    assert table.grand_total is not None
    assert table.grand_total.total == 1


def test_no_header_returns_none() -> None:
    assert parse_aggregate_table(["nothing to see", ""]) is None
    assert parse_aggregate_table([]) is None


def test_header_without_rows_keeps_empty_table() -> None:
    table = parse_aggregate_table(["Form   API", "------ ----", ""])
    assert table is not None
    assert table.groups == ()
    assert table.grand_total is None


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("API CALL AGGREGATES grouped by Form sorted by descending AVG execution time", "descending AVG execution time"),
        ("SQL CALL AGGREGATES grouped by Table Sorted By total time", "total time"),
        ("API CALL AGGREGATES grouped by Client", ""),
    ],
)
def test_sorted_by_from_name(name: str, expected: str) -> None:
    assert sorted_by_from_name(name) == expected
