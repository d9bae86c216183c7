"""Per-queue thread statistics ("API THREAD STATISTICS", "SQL THREAD STATISTICS")."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import ThreadStat
from .scalars import parse_float, parse_int, parse_percent, parse_timestamp
from .tables import FixedWidthTable, cell, contains, equals, map_columns

# SQL tables have no "Q Count"/"Q Time" columns; those fields stay zero.
_COLUMN_RULES = (
    ("queue", equals("queue")),
    ("thread", equals("thread")),
    ("first", contains("first")),
    ("last", contains("last")),
    ("count", equals("count")),
    ("q_count", equals("q count")),
    ("q_time", equals("q time")),
    ("total_time", equals("total time")),
    ("busy", contains("busy")),
)


def parse_thread_stats(lines: Sequence[str]) -> tuple[ThreadStat, ...]:
    """Parse a thread statistics table.

    The queue name is only printed on the first thread of each queue; later
    rows inherit it.
    """
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _COLUMN_RULES)

    entries: list[ThreadStat] = []
    queue = ""
    for values in table.rows(lines):
        queue = cell(values, columns, "queue") or queue
        stat = ThreadStat(
            queue=queue,
            thread_id=cell(values, columns, "thread"),
            first_time=parse_timestamp(cell(values, columns, "first")),
            last_time=parse_timestamp(cell(values, columns, "last")),
            count=parse_int(cell(values, columns, "count")),
            q_count=parse_int(cell(values, columns, "q_count")),
            q_time=parse_float(cell(values, columns, "q_time")),
            total_time=parse_float(cell(values, columns, "total_time")),
            busy_pct=parse_percent(cell(values, columns, "busy")),
        )
        if stat.thread_id:
            entries.append(stat)
    return tuple(entries)
