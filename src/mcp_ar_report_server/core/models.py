"""Core data models for parsed analyzer reports.

Every value here is produced once per parse and never mutated afterwards.
Optional sub-results on ``ParseResult`` stay ``None`` until the matching
report section is found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)
JAR_SOURCE = "jar_parsed"


@dataclass(frozen=True, slots=True)
class GeneralStatistics:
    """Scalar key/value statistics printed at the top of a report."""

    total_lines: int = 0
    api_count: int = 0
    sql_count: int = 0
    filter_count: int = 0
    esc_count: int = 0
    unique_users: int = 0
    unique_forms: int = 0
    unique_tables: int = 0
    log_start: datetime = ZERO_TIME
    log_end: datetime = ZERO_TIME
    log_duration: str = ""


@dataclass(frozen=True, slots=True)
class TopNEntry:
    """One ranked operation from a "longest running" table."""

    rank: int = 0
    line_number: int = 0
    file_number: int = 0
    timestamp: datetime = ZERO_TIME
    trace_id: str = ""
    rpc_id: str = ""
    queue: str = ""
    identifier: str = ""  # API code, SQL text, filter or escalation name
    form: str = ""
    user: str = ""
    duration_ms: int = 0
    queue_time_ms: int = 0
    success: bool = False
    details: str = ""


@dataclass(frozen=True, slots=True)
class DashboardData:
    """Headline statistics, top-N tables and distribution counts.

    ``distribution`` is a plain dict so it serializes as a JSON object; each
    result gets its own copy, and because of it results are not hashable.
    """

    general_stats: GeneralStatistics = field(default_factory=GeneralStatistics)
    top_api_calls: tuple[TopNEntry, ...] = ()
    top_sql: tuple[TopNEntry, ...] = ()
    top_filters: tuple[TopNEntry, ...] = ()
    top_escalations: tuple[TopNEntry, ...] = ()
    # dimension (threads/users/errors/forms) -> category -> count
    distribution: dict[str, dict[str, int]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AggregateRow:
    """Counts and timings for one operation type (or a subtotal/grand total)."""

    operation_type: str = ""
    ok: int = 0
    fail: int = 0
    total: int = 0
    min_time: float = 0.0
    min_line: int = 0
    max_time: float = 0.0
    max_line: int = 0
    avg_time: float = 0.0
    sum_time: float = 0.0


@dataclass(frozen=True, slots=True)
class AggregateGroup:
    entity_name: str
    rows: tuple[AggregateRow, ...] = ()
    subtotal: AggregateRow | None = None


@dataclass(frozen=True, slots=True)
class AggregateTable:
    grouped_by: str = ""
    sorted_by: str = ""
    groups: tuple[AggregateGroup, ...] = ()
    grand_total: AggregateRow | None = None


@dataclass(frozen=True, slots=True)
class AggregatesReport:
    source: str = JAR_SOURCE
    api_by_form: AggregateTable | None = None
    api_by_client: AggregateTable | None = None
    api_by_client_ip: AggregateTable | None = None
    sql_by_table: AggregateTable | None = None
    esc_by_form: AggregateTable | None = None
    esc_by_pool: AggregateTable | None = None


@dataclass(frozen=True, slots=True)
class GapEntry:
    """A silence interval; ``gap_duration`` is in seconds."""

    gap_duration: float = 0.0
    line_number: int = 0
    trace_id: str = ""
    timestamp: datetime = ZERO_TIME
    details: str = ""


@dataclass(frozen=True, slots=True)
class GapsReport:
    source: str = JAR_SOURCE
    line_gaps: tuple[GapEntry, ...] = ()
    thread_gaps: tuple[GapEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class ThreadStat:
    """Activity of one thread within one queue.

    ``q_count``/``q_time`` are only printed for API threads and stay zero for SQL.
    """

    queue: str = ""
    thread_id: str = ""
    first_time: datetime = ZERO_TIME
    last_time: datetime = ZERO_TIME
    count: int = 0
    q_count: int = 0
    q_time: float = 0.0
    total_time: float = 0.0
    busy_pct: float = 0.0


@dataclass(frozen=True, slots=True)
class ThreadStatsReport:
    source: str = JAR_SOURCE
    api_threads: tuple[ThreadStat, ...] = ()
    sql_threads: tuple[ThreadStat, ...] = ()


@dataclass(frozen=True, slots=True)
class APIError:
    end_line: int = 0
    trace_id: str = ""
    queue: str = ""
    api: str = ""
    form: str = ""
    user: str = ""
    start_time: datetime = ZERO_TIME
    error_message: str = ""


class ExceptionKind(str, Enum):
    API = "api"
    SQL = "sql"


@dataclass(frozen=True, slots=True)
class ExceptionEntry:
    """An exception report row.

    API rows carry a short type code in ``type``; SQL rows carry the
    offending statement in ``sql_statement`` instead.
    """

    kind: ExceptionKind = ExceptionKind.API
    line_number: int = 0
    trace_id: str = ""
    type: str = ""
    message: str = ""
    sql_statement: str = ""


@dataclass(frozen=True, slots=True)
class ExceptionsReport:
    source: str = JAR_SOURCE
    api_errors: tuple[APIError, ...] = ()
    api_exceptions: tuple[ExceptionEntry, ...] = ()
    sql_exceptions: tuple[ExceptionEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class FilterMostExecuted:
    filter_name: str = ""
    pass_count: int = 0
    fail_count: int = 0


@dataclass(frozen=True, slots=True)
class FilterPerTransaction:
    line_number: int = 0
    trace_id: str = ""
    filter_count: int = 0
    operation: str = ""
    form: str = ""
    request_id: str = ""
    filters_per_sec: float = 0.0  # printed as "NaN" for zero elapsed time, stored as 0


@dataclass(frozen=True, slots=True)
class FilterExecutedPerTxn:
    line_number: int = 0
    trace_id: str = ""
    filter_name: str = ""
    pass_count: int = 0
    fail_count: int = 0


@dataclass(frozen=True, slots=True)
class FilterLevel:
    line_number: int = 0
    trace_id: str = ""
    filter_level: int = 0
    operation: str = ""
    form: str = ""
    request_id: str = ""


@dataclass(frozen=True, slots=True)
class FilterComplexityReport:
    source: str = JAR_SOURCE
    longest_running: tuple[TopNEntry, ...] = ()
    most_executed: tuple[FilterMostExecuted, ...] = ()
    per_transaction: tuple[FilterPerTransaction, ...] = ()
    executed_per_txn: tuple[FilterExecutedPerTxn, ...] = ()
    filter_levels: tuple[FilterLevel, ...] = ()


@dataclass(frozen=True, slots=True)
class APIAbbreviation:
    abbreviation: str
    full_name: str


@dataclass(frozen=True, slots=True)
class LoggingActivity:
    log_type: str = ""
    first_timestamp: datetime = ZERO_TIME
    last_timestamp: datetime = ZERO_TIME
    duration_ms: int = 0


@dataclass(frozen=True, slots=True)
class FileMetadata:
    file_name: str = ""
    file_number: int = 0
    start_time: datetime = ZERO_TIME
    end_time: datetime = ZERO_TIME
    duration_ms: int = 0


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Root value returned by the report parser."""

    dashboard: DashboardData = field(default_factory=DashboardData)
    aggregates: AggregatesReport | None = None
    gaps: GapsReport | None = None
    exceptions: ExceptionsReport | None = None
    thread_stats: ThreadStatsReport | None = None
    filters: FilterComplexityReport | None = None
    api_abbreviations: tuple[APIAbbreviation, ...] | None = None
    queued_api_calls: tuple[TopNEntry, ...] | None = None
    logging_activities: tuple[LoggingActivity, ...] | None = None
    file_metadata: tuple[FileMetadata, ...] | None = None
