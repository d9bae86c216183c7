from __future__ import annotations

import json

from mcp_ar_report_server.core.models import ExceptionEntry, ExceptionKind, ExceptionsReport, ParseResult
from mcp_ar_report_server.core.report import parse_report
from mcp_ar_report_server.core.report_service import RESULT_SECTIONS
from mcp_ar_report_server.core.serialization import parse_result_schema, to_json, to_jsonable


def test_to_jsonable_has_every_top_level_key(v4_report: str) -> None:
    data = to_jsonable(parse_report(v4_report))

    assert list(data) == list(RESULT_SECTIONS)
    assert data["aggregates"] is None
    assert data["gaps"]["source"] == "jar_parsed"
    assert isinstance(data["dashboard"]["top_api_calls"], list)


def test_timestamps_are_iso_strings(v4_report: str) -> None:
    data = to_jsonable(parse_report(v4_report))

    stats = data["dashboard"]["general_stats"]
    assert stats["log_start"].startswith("2025-11-24T14:46:58.505")
    assert stats["log_duration"] == "10.162"
    top = data["dashboard"]["top_api_calls"][0]
    assert top["timestamp"].startswith("2025-11-24T14:47:03.770")


def test_zero_time_serializes_as_year_one() -> None:
    data = to_jsonable(ParseResult())
    assert data["dashboard"]["general_stats"]["log_start"].startswith("0001-01-01T00:00:00")


def test_exception_kind_serializes_as_value() -> None:
    result = ParseResult(
        exceptions=ExceptionsReport(sql_exceptions=(ExceptionEntry(kind=ExceptionKind.SQL, line_number=3),)),
    )
    data = to_jsonable(result)
    assert data["exceptions"]["sql_exceptions"][0]["kind"] == "sql"


def test_to_json_matches_jsonable(v3_report: str) -> None:
    result = parse_report(v3_report)
    assert json.loads(to_json(result, indent=2)) == to_jsonable(result)


def test_parse_result_schema() -> None:
    schema = parse_result_schema()
    assert set(RESULT_SECTIONS) <= set(schema["properties"])
