"""Route report sections to their parsers.

Section names drift between analyzer versions, so routing is by keyword on
the lowercased name. ``SECTION_RULES`` is ordered: the first rule whose
predicate accepts a name handles that section, and more specific rules sit
above the generic ones (for example "most executed fltr per transaction"
before "most executed fltr").
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..models import (
    AggregatesReport,
    AggregateTable,
    APIAbbreviation,
    DashboardData,
    ExceptionsReport,
    FileMetadata,
    FilterComplexityReport,
    GapsReport,
    GeneralStatistics,
    LoggingActivity,
    ParseResult,
    ThreadStatsReport,
    TopNEntry,
)
from .aggregates import parse_aggregate_table, sorted_by_from_name
from .exceptions import parse_api_errors, parse_exception_report
from .filters import (
    parse_filter_levels,
    parse_filters_executed_per_txn,
    parse_filters_per_transaction,
    parse_most_executed_filters,
)
from .gaps import parse_gap_entries
from .metadata import parse_abbreviation_legend, parse_file_metadata, parse_logging_activity
from .sections import PREAMBLE_SECTION
from .stats import parse_distribution, parse_general_statistics
from .threads import parse_thread_stats
from .topn import parse_topn_section, section_has_no_data

NamePredicate = Callable[[str], bool]


@dataclass
class ReportBuilder:
    """Mutable accumulator filled section by section, frozen by ``build()``."""

    general_stats: GeneralStatistics = field(default_factory=GeneralStatistics)
    top: dict[str, tuple[TopNEntry, ...]] = field(default_factory=dict)
    distribution: dict[str, dict[str, int]] = field(default_factory=dict)
    aggregates: dict[str, AggregateTable] = field(default_factory=dict)
    gaps: dict[str, tuple] = field(default_factory=dict)
    exceptions: dict[str, tuple] = field(default_factory=dict)
    thread_stats: dict[str, tuple] = field(default_factory=dict)
    filters: dict[str, tuple] = field(default_factory=dict)
    api_abbreviations: tuple[APIAbbreviation, ...] | None = None
    queued_api_calls: tuple[TopNEntry, ...] | None = None
    logging_activities: tuple[LoggingActivity, ...] | None = None
    file_metadata: tuple[FileMetadata, ...] | None = None

    def build(self) -> ParseResult:
        """Freeze the accumulated state. The builder itself is left untouched."""
        filters = dict(self.filters)
        top_filters = self.top.get("top_filters", ())
        if top_filters and filters:
            filters["longest_running"] = top_filters
        return ParseResult(
            dashboard=DashboardData(
                general_stats=self.general_stats,
                distribution={dim: dict(counts) for dim, counts in self.distribution.items()},
                **self.top,
            ),
            aggregates=AggregatesReport(**self.aggregates) if self.aggregates else None,
            gaps=GapsReport(**self.gaps) if self.gaps else None,
            exceptions=ExceptionsReport(**self.exceptions) if self.exceptions else None,
            thread_stats=ThreadStatsReport(**self.thread_stats) if self.thread_stats else None,
            filters=FilterComplexityReport(**filters) if filters else None,
            api_abbreviations=self.api_abbreviations,
            queued_api_calls=self.queued_api_calls,
            logging_activities=self.logging_activities,
            file_metadata=self.file_metadata,
        )


SectionHandler = Callable[[ReportBuilder, str, Sequence[str]], None]


@dataclass(frozen=True, slots=True)
class SectionRule:
    name: str
    matches: NamePredicate
    handle: SectionHandler


# --- name predicates -----------------------------------------------------


def has(*words: str) -> NamePredicate:
    """All of ``words`` appear in the name."""
    return lambda name: all(w in name for w in words)


def has_any(*words: str) -> NamePredicate:
    return lambda name: any(w in name for w in words)


def lacks(match: NamePredicate, *words: str) -> NamePredicate:
    """``match`` accepts the name and none of ``words`` appear in it."""
    return lambda name: match(name) and not any(w in name for w in words)


def either(*matches: NamePredicate) -> NamePredicate:
    return lambda name: any(m(name) for m in matches)


# --- handlers ------------------------------------------------------------


def _general_stats(builder: ReportBuilder, name: str, body: Sequence[str]) -> None:
    builder.general_stats = parse_general_statistics(body, builder.general_stats)


def _top(slot: str) -> SectionHandler:
    def handle(builder: ReportBuilder, name: str, body: Sequence[str]) -> None:
        builder.top[slot] = parse_topn_section(body)

    return handle


def _queued(builder: ReportBuilder, name: str, body: Sequence[str]) -> None:
    if section_has_no_data(body):
        return
    builder.queued_api_calls = parse_topn_section(body) or None


def _aggregate(slot: str) -> SectionHandler:
    def handle(builder: ReportBuilder, name: str, body: Sequence[str]) -> None:
        table = parse_aggregate_table(body, sorted_by=sorted_by_from_name(name))
        if table is not None:
            builder.aggregates[slot] = table

    return handle


def _part(group: str, slot: str, parse: Callable[[Sequence[str]], tuple]) -> SectionHandler:
    """Store non-empty ``parse(body)`` output under ``builder.<group>[slot]``."""

    def handle(builder: ReportBuilder, name: str, body: Sequence[str]) -> None:
        entries = parse(body)
        if entries:
            getattr(builder, group)[slot] = entries

    return handle


def _field(attr: str, parse: Callable[[Sequence[str]], tuple]) -> SectionHandler:
    def handle(builder: ReportBuilder, name: str, body: Sequence[str]) -> None:
        entries = parse(body)
        if entries:
            setattr(builder, attr, entries)

    return handle


def _distribution(dimension: str) -> SectionHandler:
    def handle(builder: ReportBuilder, name: str, body: Sequence[str]) -> None:
        dist = parse_distribution(body)
        if dist:
            builder.distribution[dimension] = dist

    return handle


SECTION_RULES: tuple[SectionRule, ...] = (
    SectionRule("general_stats", lambda n: n == PREAMBLE_SECTION, _general_stats),
    SectionRule("general_stats", has("general statistic"), _general_stats),
    # gap analysis
    SectionRule("line_gaps", has("longest line gap"), _part("gaps", "line_gaps", parse_gap_entries)),
    SectionRule("thread_gaps", has("longest thread gap"), _part("gaps", "thread_gaps", parse_gap_entries)),
    SectionRule("api_abbreviations", has("abbreviation legend"), _field("api_abbreviations", parse_abbreviation_legend)),
    # API
    SectionRule(
        "top_api_calls",
        either(has("top", "api"), has("longest", "running", "api")),
        _top("top_api_calls"),
    ),
    SectionRule("queued_api_calls", has("queued", "api"), _queued),
    SectionRule("api_by_form", has("api call aggregates", "by form"), _aggregate("api_by_form")),
    SectionRule("api_by_client_ip", has("api call aggregates", "by client ip"), _aggregate("api_by_client_ip")),
    SectionRule("api_by_client", has("api call aggregates", "by client"), _aggregate("api_by_client")),
    SectionRule(
        "api_threads",
        has("api thread statistics"),
        _part("thread_stats", "api_threads", parse_thread_stats),
    ),
    SectionRule("api_errors", has("errored out"), _part("exceptions", "api_errors", parse_api_errors)),
    SectionRule(
        "api_exceptions",
        has("api exception report"),
        _part("exceptions", "api_exceptions", parse_exception_report),
    ),
    # SQL
    SectionRule("top_sql", either(has("top", "sql"), has("longest", "running", "sql")), _top("top_sql")),
    SectionRule("sql_by_table", has("sql call aggregates", "by table"), _aggregate("sql_by_table")),
    SectionRule(
        "sql_threads",
        has("sql thread statistics"),
        _part("thread_stats", "sql_threads", parse_thread_stats),
    ),
    SectionRule(
        "sql_exceptions",
        has("sql exception report"),
        _part("exceptions", "sql_exceptions", parse_exception_report),
    ),
    # escalations
    SectionRule(
        "top_escalations",
        either(
            has("top", "escalation"),
            has("longest", "running", "escl"),
            has("longest", "running", "escalation"),
        ),
        _top("top_escalations"),
    ),
    SectionRule("esc_by_form", has("escalation call aggregates", "by form"), _aggregate("esc_by_form")),
    SectionRule("esc_by_pool", has("escalation call aggregates", "by pool"), _aggregate("esc_by_pool")),
    # filters
    SectionRule(
        "top_filters",
        either(has("top", "filter"), has("longest", "running", "fltr")),
        _top("top_filters"),
    ),
    SectionRule(
        "executed_per_txn",
        has("most executed fltr per transaction"),
        _part("filters", "executed_per_txn", parse_filters_executed_per_txn),
    ),
    SectionRule(
        "most_executed",
        has("most executed fltr"),
        _part("filters", "most_executed", parse_most_executed_filters),
    ),
    SectionRule(
        "per_transaction",
        has("most filters per transaction"),
        _part("filters", "per_transaction", parse_filters_per_transaction),
    ),
    SectionRule(
        "filter_levels",
        has("most filter levels"),
        _part("filters", "filter_levels", parse_filter_levels),
    ),
    # bookkeeping
    SectionRule("logging_activities", has("logging activity"), _field("logging_activities", parse_logging_activity)),
    SectionRule(
        "file_metadata",
        has_any("input filename", "file information"),
        _field("file_metadata", parse_file_metadata),
    ),
    # v3 distribution lists; anything more specific has been claimed above
    SectionRule(
        "threads",
        lacks(has("thread"), "gap", "api thread", "sql thread"),
        _distribution("threads"),
    ),
    SectionRule(
        "errors",
        lacks(has_any("exception", "error"), "errored out", "api exception", "sql exception"),
        _distribution("errors"),
    ),
    SectionRule("users", lacks(has("user"), "count"), _distribution("users")),
    SectionRule("forms", lacks(has("form"), "count", "longest", "aggregates"), _distribution("forms")),
)


def find_rule(name: str, rules: Sequence[SectionRule] = SECTION_RULES) -> SectionRule | None:
    """Return the first rule accepting ``name``.

    The reserved preamble key is matched as-is; every other name is
    lowercased and trimmed first.
    """
    normalized = name if name == PREAMBLE_SECTION else name.strip().lower()
    for rule in rules:
        if rule.matches(normalized):
            return rule
    return None
