"""Report parser entry point.

``parse_report`` is lenient: sections it does not recognize and rows it
cannot read are skipped. The only failure is an empty report.
"""

from __future__ import annotations

import logging

from ..models import ParseResult
from .dispatch import ReportBuilder, find_rule
from .sections import split_sections

logger = logging.getLogger(__name__)


class EmptyReportError(ValueError):
    """Raised when the report text is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("report parser: empty output")


def parse_report(text: str) -> ParseResult:
    """Parse analyzer report text into a ``ParseResult``.

    ``dashboard`` is always present; the other sub-results stay ``None``
    unless their section was found and yielded data.
    """
    if not text.strip():
        raise EmptyReportError()

    sections = split_sections(text)
    logger.debug("Split report into %d sections", len(sections))

    builder = ReportBuilder()
    for name, body in sections.items():
        rule = find_rule(name)
        if rule is None:
            logger.debug("Ignoring section %r", name)
            continue
        logger.debug("Section %r -> %s (%d lines)", name, rule.name, len(body))
        rule.handle(builder, name, body)
    return builder.build()
