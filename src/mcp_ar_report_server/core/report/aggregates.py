"""Grouped aggregate tables ("API CALL AGGREGATES grouped by Form ...").

Layout::

    Form            API      OK   Fail  Total  ...  SUM Time
    --------------- ------ ------ ------ ------ ... ------------
    SRM:Request     SE        1             1  ...        0.122
                    GS        1             1  ...        0.000
                           ------ ------ ------     ------------
                                2             2  ...        0.122

                           ====== ====== ======     ============
                               11            11  ...        0.220

A non-empty first column opens a group; rows under it with an empty first
column belong to it. A dash rule announces the group subtotal, an equals
rule the table grand total.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..models import AggregateGroup, AggregateRow, AggregateTable
from .scalars import parse_float, parse_int
from .tables import FixedWidthTable, cell, equals, is_dash_separator, is_equals_separator, map_columns

_COLUMN_RULES = (
    ("operation", equals("api", "sql", "escalation")),
    ("ok", equals("ok")),
    ("fail", equals("fail")),
    ("total", equals("total")),
    ("count", equals("count")),
    ("min_time", equals("min time")),
    ("min_line", equals("min line")),
    ("max_time", equals("max time")),
    ("max_line", equals("max line")),
    ("avg_time", equals("avg time")),
    ("sum_time", equals("sum time")),
)


def _build_row(values: Sequence[str], columns: Mapping[str, int]) -> AggregateRow:
    # Escalation tables print "Count" where the others print "Total".
    total_role = "total" if "total" in columns else "count"
    return AggregateRow(
        operation_type=cell(values, columns, "operation"),
        ok=parse_int(cell(values, columns, "ok")),
        fail=parse_int(cell(values, columns, "fail")),
        total=parse_int(cell(values, columns, total_role)),
        min_time=parse_float(cell(values, columns, "min_time")),
        min_line=parse_int(cell(values, columns, "min_line")),
        max_time=parse_float(cell(values, columns, "max_time")),
        max_line=parse_int(cell(values, columns, "max_line")),
        avg_time=parse_float(cell(values, columns, "avg_time")),
        sum_time=parse_float(cell(values, columns, "sum_time")),
    )


@dataclass
class _GroupBuilder:
    entity_name: str
    rows: list[AggregateRow] = field(default_factory=list)
    subtotal: AggregateRow | None = None

    def build(self) -> AggregateGroup:
        return AggregateGroup(
            entity_name=self.entity_name,
            rows=tuple(self.rows),
            subtotal=self.subtotal,
        )


def parse_aggregate_table(lines: Sequence[str], *, sorted_by: str = "") -> AggregateTable | None:
    """Parse a grouped aggregate table, or return None when no table header is found."""
    table = FixedWidthTable.locate(lines)
    if table is None:
        return None
    columns = map_columns(table.headers, _COLUMN_RULES)

    groups: list[AggregateGroup] = []
    grand_total: AggregateRow | None = None
    current: _GroupBuilder | None = None
    expect_subtotal = False
    expect_grand_total = False

    def flush() -> None:
        nonlocal current
        if current is not None:
            groups.append(current.build())
            current = None

    for line in lines[table.separator_index + 1 :]:
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.startswith("###"):
            break
        if is_equals_separator(line):
            flush()
            expect_grand_total = True
            continue
        if is_dash_separator(line):
            expect_subtotal = True
            continue

        values = table.values(line)
        if expect_grand_total:
            grand_total = _build_row(values, columns)
            expect_grand_total = False
            continue
        if expect_subtotal:
            if current is not None:
                current.subtotal = _build_row(values, columns)
                flush()
            expect_subtotal = False
            continue

        entity = values[0] if values else ""
        if entity:
            flush()
            current = _GroupBuilder(entity_name=entity)
        if current is not None:
            row = _build_row(values, columns)
            if row.total > 0 or row.ok > 0 or row.operation_type:
                current.rows.append(row)
    flush()

    return AggregateTable(
        grouped_by=table.headers[0].strip() if table.headers else "",
        sorted_by=sorted_by,
        groups=tuple(groups),
        grand_total=grand_total,
    )


def sorted_by_from_name(name: str) -> str:
    """Return the text after "sorted by" in a section name, or ""."""
    idx = name.lower().find("sorted by")
    if idx < 0:
        return ""
    return name[idx + len("sorted by") + 1 :].strip()
