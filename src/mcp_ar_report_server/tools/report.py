"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mcp_ar_report_server.core.report import parse_report
from mcp_ar_report_server.core.report_service import (
    parse_report_file,
    resolve_report_path,
    select_sections,
)

# Hard cap on inline report text, in characters.
MAX_TEXT_CHARS = 16 * 1024 * 1024


def _normalize_sections(sections: Sequence[str] | str | None) -> list[str] | None:
    """Accept a list of names or one comma-separated string."""
    if sections is None:
        return None
    if isinstance(sections, str):
        sections = sections.split(",")
    return [s for s in sections if s.strip()] or None


async def parse_report_impl(
    *,
    report_path: str,
    sections: Sequence[str] | str | None = None,
) -> dict[str, Any]:
    """Implementation for the `parse_report` MCP tool.

    Notes
    -----
    - report_path is resolved under AR_REPORT_BASE_DIR
    - sections narrows the output to the named top-level keys
    """
    wanted = _normalize_sections(sections)
    path = resolve_report_path(report_path)
    result = await parse_report_file(path)
    return select_sections(result, wanted)


def parse_report_text_impl(
    *,
    report_text: str,
    sections: Sequence[str] | str | None = None,
) -> dict[str, Any]:
    """Implementation for the `parse_report_text` MCP tool."""
    if len(report_text) > MAX_TEXT_CHARS:
        raise ValueError(f"report_text is too large (max {MAX_TEXT_CHARS} characters)")
    wanted = _normalize_sections(sections)
    return select_sections(parse_report(report_text), wanted)
