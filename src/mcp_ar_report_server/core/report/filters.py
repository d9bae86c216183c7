"""Filter complexity tables.

Four shapes share the same fixed-width layout:

- MOST EXECUTED FLTR: filter name with pass/fail counts
- MOST FILTERS PER TRANSACTION: filter count and rate per transaction
- MOST EXECUTED FLTR PER TRANSACTION: per-transaction filter pass/fail counts
- MOST FILTER LEVELS: nesting depth per transaction

Long filter names are truncated by the analyzer and marked with a trailing
backtick and exclamation mark; they are kept as printed.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models import FilterExecutedPerTxn, FilterLevel, FilterMostExecuted, FilterPerTransaction
from .scalars import parse_float, parse_int
from .tables import FixedWidthTable, cell, contains, equals, map_columns

_MOST_EXECUTED_RULES = (
    ("filter", equals("filter")),
    ("pass", contains("pass")),
    ("fail", contains("fail")),
)

_PER_TRANSACTION_RULES = (
    ("line", equals("line#")),
    ("trid", equals("trid")),
    ("count", contains("filter count")),
    ("operation", equals("operation")),
    ("form", equals("form")),
    ("request", contains("request")),
    ("rate", contains("filters/")),
)

_EXECUTED_PER_TXN_RULES = (
    ("line", equals("line#")),
    ("trid", equals("trid")),
    ("filter", equals("filter")),
    ("pass", contains("pass")),
    ("fail", contains("fail")),
)

_LEVEL_RULES = (
    ("line", equals("line#")),
    ("trid", equals("trid")),
    ("level", contains("filter level")),
    ("operation", equals("operation")),
    ("form", equals("form")),
    ("request", contains("request")),
)


def parse_most_executed_filters(lines: Sequence[str]) -> tuple[FilterMostExecuted, ...]:
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _MOST_EXECUTED_RULES)

    entries: list[FilterMostExecuted] = []
    for values in table.rows(lines):
        entry = FilterMostExecuted(
            filter_name=cell(values, columns, "filter"),
            pass_count=parse_int(cell(values, columns, "pass")),
            fail_count=parse_int(cell(values, columns, "fail")),
        )
        if entry.filter_name:
            entries.append(entry)
    return tuple(entries)


def parse_filters_per_transaction(lines: Sequence[str]) -> tuple[FilterPerTransaction, ...]:
    """Parse "MOST FILTERS PER TRANSACTION".

    The analyzer prints "NaN" filters/sec for transactions with no elapsed
    time; that is stored as 0.
    """
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _PER_TRANSACTION_RULES)

    entries: list[FilterPerTransaction] = []
    for values in table.rows(lines):
        entry = FilterPerTransaction(
            line_number=parse_int(cell(values, columns, "line")),
            trace_id=cell(values, columns, "trid"),
            filter_count=parse_int(cell(values, columns, "count")),
            operation=cell(values, columns, "operation"),
            form=cell(values, columns, "form"),
            request_id=cell(values, columns, "request"),
            filters_per_sec=parse_float(cell(values, columns, "rate")),
        )
        if entry.line_number > 0 or entry.trace_id:
            entries.append(entry)
    return tuple(entries)


def parse_filters_executed_per_txn(lines: Sequence[str]) -> tuple[FilterExecutedPerTxn, ...]:
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _EXECUTED_PER_TXN_RULES)

    entries: list[FilterExecutedPerTxn] = []
    for values in table.rows(lines):
        entry = FilterExecutedPerTxn(
            line_number=parse_int(cell(values, columns, "line")),
            trace_id=cell(values, columns, "trid"),
            filter_name=cell(values, columns, "filter"),
            pass_count=parse_int(cell(values, columns, "pass")),
            fail_count=parse_int(cell(values, columns, "fail")),
        )
        if entry.line_number > 0 or entry.trace_id:
            entries.append(entry)
    return tuple(entries)


def parse_filter_levels(lines: Sequence[str]) -> tuple[FilterLevel, ...]:
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _LEVEL_RULES)

    entries: list[FilterLevel] = []
    for values in table.rows(lines):
        entry = FilterLevel(
            line_number=parse_int(cell(values, columns, "line")),
            trace_id=cell(values, columns, "trid"),
            filter_level=parse_int(cell(values, columns, "level")),
            operation=cell(values, columns, "operation"),
            form=cell(values, columns, "form"),
            request_id=cell(values, columns, "request"),
        )
        if entry.line_number > 0 or entry.trace_id:
            entries.append(entry)
    return tuple(entries)
