"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: parse a saved report file, or report text passed inline
- Resources: help, a sample report, the result schema and raw report files

Run locally (stdio):
    python -m mcp_ar_report_server.server.report_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_ar_report_server.resources.registry import register_resources
from mcp_ar_report_server.tools.report import parse_report_impl, parse_report_text_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure logging on stderr; stdout carries the MCP protocol."""
    level_name = os.getenv("AR_REPORT_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


mcp = FastMCP("ar-report", json_response=True)

register_resources(mcp)


@mcp.tool()
async def parse_report(
    report_path: str,
    sections: Sequence[str] | str | None = None,
) -> dict[str, Any]:
    """Parse a saved AR System log analyzer report into structured data.

    Parameters
    ----------
    report_path:
        Path to the report text file (.txt, .log, .out, .report, optionally .gz).
        Relative paths are taken from AR_REPORT_BASE_DIR.
    sections:
        Top-level keys to return, as a list (["dashboard", "aggregates"]) or a
        comma-separated string ("dashboard,aggregates"). Case-insensitive.
        Valid: dashboard, aggregates, gaps, exceptions, thread_stats, filters,
        api_abbreviations, queued_api_calls, logging_activities, file_metadata.
        Omit to return everything.

    Returns
    -------
    dict:
        The parse result; sections that were not found in the report are null.
    """
    return await parse_report_impl(report_path=report_path, sections=sections)


@mcp.tool()
def parse_report_text(
    report_text: str,
    sections: Sequence[str] | str | None = None,
) -> dict[str, Any]:
    """Parse report text passed inline. Same output and `sections` filter as parse_report."""
    return parse_report_text_impl(report_text=report_text, sections=sections)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
