"""Report bookkeeping sections: abbreviation legend, logging activity, input files."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import APIAbbreviation, FileMetadata, LoggingActivity
from .scalars import duration_to_ms, parse_int, parse_timestamp
from .tables import FixedWidthTable, cell, contains, equals, map_columns

_ACTIVITY_RULES = (
    ("type", equals("type")),
    ("first", equals("first")),
    ("last", equals("last")),
    ("duration", contains("duration")),
)

_FILE_RULES = (
    ("name", lambda h: h == "name" or "filename" in h),
    ("number", lambda h: h == "file#" or "number" in h),
    ("start", lambda h: "file start" in h or ("start" in h and "name" not in h)),
    ("end", lambda h: "file end" in h or ("end" in h and "name" not in h)),
    ("duration", contains("duration")),
)


def parse_abbreviation_legend(lines: Sequence[str]) -> tuple[APIAbbreviation, ...]:
    """Parse ``CE = ARCreateEntry`` lines; both sides must be non-empty."""
    entries: list[APIAbbreviation] = []
    for line in lines:
        abbr, eq, full = line.strip().partition("=")
        abbr, full = abbr.strip(), full.strip()
        if eq and abbr and full:
            entries.append(APIAbbreviation(abbreviation=abbr, full_name=full))
    return tuple(entries)


def parse_logging_activity(lines: Sequence[str]) -> tuple[LoggingActivity, ...]:
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _ACTIVITY_RULES)

    entries: list[LoggingActivity] = []
    for values in table.rows(lines):
        entry = LoggingActivity(
            log_type=cell(values, columns, "type"),
            first_timestamp=parse_timestamp(cell(values, columns, "first")),
            last_timestamp=parse_timestamp(cell(values, columns, "last")),
            duration_ms=duration_to_ms(cell(values, columns, "duration")),
        )
        if entry.log_type:
            entries.append(entry)
    return tuple(entries)


def parse_file_metadata(lines: Sequence[str]) -> tuple[FileMetadata, ...]:
    """Parse the "Input filenames" / "File Information" table."""
    table = FixedWidthTable.locate(lines)
    if table is None:
        return ()
    columns = map_columns(table.headers, _FILE_RULES)

    entries: list[FileMetadata] = []
    for values in table.rows(lines):
        entry = FileMetadata(
            file_name=cell(values, columns, "name"),
            file_number=parse_int(cell(values, columns, "number")),
            start_time=parse_timestamp(cell(values, columns, "start")),
            end_time=parse_timestamp(cell(values, columns, "end")),
            duration_ms=duration_to_ms(cell(values, columns, "duration")),
        )
        if entry.file_name or entry.file_number > 0:
            entries.append(entry)
    return tuple(entries)
