"""Gap analysis tables: the longest silences between lines and within threads."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import GapEntry
from .scalars import parse_float, parse_int, parse_timestamp
from .tables import FixedWidthTable, cell, contains, equals, map_columns

_COLUMN_RULES = (
    ("gap", contains("gap")),
    ("line", equals("line#")),
    ("trid", equals("trid")),
    ("date", contains("date")),
    ("details", equals("details")),
)


def parse_gap_entries(lines: Sequence[str]) -> tuple[GapEntry, ...]:
    """Parse a "LONGEST LINE GAPS" or "LONGEST THREAD GAPS" table.

    Rows without a positive gap and without a trace id are dropped.
    """
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _COLUMN_RULES)

    entries: list[GapEntry] = []
    for values in table.rows(lines):
        entry = GapEntry(
            gap_duration=parse_float(cell(values, columns, "gap")),
            line_number=parse_int(cell(values, columns, "line")),
            trace_id=cell(values, columns, "trid"),
            timestamp=parse_timestamp(cell(values, columns, "date")),
            details=cell(values, columns, "details"),
        )
        if entry.gap_duration > 0 or entry.trace_id:
            entries.append(entry)
    return tuple(entries)
