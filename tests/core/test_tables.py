from __future__ import annotations

from mcp_ar_report_server.core.report.tables import (
    FixedWidthTable,
    cell,
    column_boundaries,
    column_values,
    contains,
    equals,
    is_dash_separator,
    is_equals_separator,
    map_columns,
)


def test_is_dash_separator() -> None:
    assert is_dash_separator("------------ ----------- ----------")
    assert is_dash_separator("   --------   ")
    assert not is_dash_separator("")
    assert not is_dash_separator("   ")
    assert not is_dash_separator("Run Time    Line#")
    assert not is_dash_separator("0.085    16351")
    assert not is_dash_separator("-- -")


def test_is_equals_separator() -> None:
    assert is_equals_separator("       ====== ====== ======")
    assert not is_equals_separator("=== General Statistics ===")
    assert not is_equals_separator("")


def test_column_boundaries() -> None:
    bounds = column_boundaries("------------ ----------- ---------- ------------------------------ ----------")
    assert len(bounds) == 5
    assert bounds[0] == (0, 12)
    assert bounds[1] == (13, 24)


def test_column_values_last_column_runs_to_end_of_line() -> None:
    bounds = column_boundaries("------ ----")
    assert column_values("   1.5 SELECT T1.C1 FROM T1", bounds) == ["1.5", "SELECT T1.C1 FROM T1"]


def test_column_values_short_line_yields_empty_cells() -> None:
    bounds = column_boundaries("------------ ----------- ----------")
    assert column_values("       0.122        8620      10031", bounds) == ["0.122", "8620", "10031"]
    assert column_values("       0.122", bounds) == ["0.122", "", ""]


def test_fixed_width_table_locate_and_rows() -> None:
    lines = [
        "",
        "  Name Count",
        "------ -----",
        "   abc     1",
        "",
        "   def     2",
        "------ -----",
        "   ghi     3",
    ]
    table = FixedWidthTable.locate(lines)
    assert table is not None
    assert table.headers == ("Name", "Count")
    assert table.separator_index == 2
    assert list(table.rows(lines)) == [["abc", "1"], ["def", "2"]]


def test_fixed_width_table_locate_needs_header_line() -> None:
    assert FixedWidthTable.locate(["------ -----", "abc 1"]) is None
    assert FixedWidthTable.locate(["no table here"]) is None


def test_map_columns_first_rule_wins_per_header() -> None:
    rules = [("line", equals("line#")), ("gap", contains("gap")), ("any_line", contains("line"))]
    columns = map_columns(["Line Gap", "Line#", "TrID"], rules)
    assert columns == {"gap": 0, "line": 1}
    assert cell(["0.2", "10", "x"], columns, "line") == "10"
    assert cell(["0.2"], columns, "line") == ""
    assert cell(["0.2", "10"], columns, "missing") == ""
