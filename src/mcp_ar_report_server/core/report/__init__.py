"""Parser for the plain-text reports of the AR System log analyzer.

Handles both report generations: v3 (``=== Name ===`` sections, pipe tables)
and v4 (``### SECTION:`` / ``###`` sections, dash-bounded fixed-width tables).
"""

from __future__ import annotations

from .parser import EmptyReportError, parse_report
from .sections import PREAMBLE_SECTION, split_sections

__all__ = [
    "PREAMBLE_SECTION",
    "EmptyReportError",
    "parse_report",
    "split_sections",
]
