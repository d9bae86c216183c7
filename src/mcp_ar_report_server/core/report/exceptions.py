"""Failure listings: API calls that errored out and API/SQL exception reports."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import APIError, ExceptionEntry, ExceptionKind
from .scalars import parse_int, parse_timestamp
from .tables import FixedWidthTable, cell, contains, equals, map_columns

_API_ERROR_RULES = (
    ("end_line", contains("end line")),
    ("trid", equals("trid")),
    ("queue", equals("queue")),
    ("api", equals("api")),
    ("form", equals("form")),
    ("user", equals("user")),
    ("start", contains("start time")),
    ("error", contains("error")),
)

_EXCEPTION_RULES = (
    ("line", equals("line#")),
    ("trid", equals("trid")),
    ("type", equals("type")),
    ("message", equals("message")),
    ("sql", contains("sql statement")),
)


def parse_api_errors(lines: Sequence[str]) -> tuple[APIError, ...]:
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _API_ERROR_RULES)

    entries: list[APIError] = []
    for values in table.rows(lines):
        entry = APIError(
            end_line=parse_int(cell(values, columns, "end_line")),
            trace_id=cell(values, columns, "trid"),
            queue=cell(values, columns, "queue"),
            api=cell(values, columns, "api"),
            form=cell(values, columns, "form"),
            user=cell(values, columns, "user"),
            start_time=parse_timestamp(cell(values, columns, "start")),
            error_message=cell(values, columns, "error"),
        )
        if entry.trace_id or entry.end_line > 0:
            entries.append(entry)
    return tuple(entries)


def parse_exception_report(lines: Sequence[str]) -> tuple[ExceptionEntry, ...]:
    """Parse an API or SQL exception report.

    The SQL variant is recognized by its "SQL Statement" column; it has no
    "Type" column.
    """
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _EXCEPTION_RULES)
    kind = ExceptionKind.SQL if "sql" in columns else ExceptionKind.API

    entries: list[ExceptionEntry] = []
    for values in table.rows(lines):
        entry = ExceptionEntry(
            kind=kind,
            line_number=parse_int(cell(values, columns, "line")),
            trace_id=cell(values, columns, "trid"),
            type=cell(values, columns, "type"),
            message=cell(values, columns, "message"),
            sql_statement=cell(values, columns, "sql"),
        )
        if entry.line_number > 0 or entry.trace_id:
            entries.append(entry)
    return tuple(entries)
