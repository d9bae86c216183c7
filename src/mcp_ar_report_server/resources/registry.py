"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_ar_report_server.core.report_service import (
    ALLOWED_REPORT_SUFFIXES,
    BASE_DIR_ENV,
    RESULT_SECTIONS,
    base_dir,
    load_report,
    resolve_report_path,
)
from mcp_ar_report_server.core.serialization import parse_result_schema

SAMPLE_REPORT = """\
AR System Log Analyzer, version 4.0.0 (for AR server logs versions 25.3.x+).

             Start Time: Mon Nov 24 2025 14:46:58.505
               End Time: Mon Nov 24 2025 14:47:08.667
           Elapsed Time: 10.162
            Total Lines: 16880
              API Count: 251
              SQL Count: 7307
              ESC Count: 6260

###  SECTION: API  #####################################################

### API Call Abbreviation Legend

   CE = ARCreateEntry
   SE = ARSetEntry

### 50 LONGEST RUNNING INDIVIDUAL API CALLS

    Run Time First Line# Last Line#                           TrID Queue      API        Form
------------ ----------- ---------- ------------------------------ ---------- ---------- ----------------------------
       0.122        8620      10031 ppvN52iaQZmnf3QKV41xnA:0009991 Prv:390680 SE         SRM:RequestApDetailSignature
       0.061        7922       8344 ppvN52iaQZmnf3QKV41xnA:0009973 Prv:390680 CE         AP:Signature

### 50 LONGEST QUEUED INDIVIDUAL API CALLS

No Queued API's
"""


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://ar-report/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        allowed = ", ".join(sorted(ALLOWED_REPORT_SUFFIXES))
        return (
            "Resources:\n"
            "- app://ar-report/help\n"
            "- app://ar-report/examples/sample-report\n"
            "- app://ar-report/schemas/parse-result\n"
            f"- report://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed}, .gz)\n"
            f"\nResult sections: {', '.join(RESULT_SECTIONS)}\n"
            f"Base directory: {base_dir()}\n"
        )

    @mcp.resource("app://ar-report/examples/sample-report")
    def sample_report() -> str:
        """Return a tiny v4 report for demos and tests."""
        return SAMPLE_REPORT

    @mcp.resource("app://ar-report/schemas/parse-result")
    def parse_result_schema_resource() -> dict[str, Any]:
        """Return the JSON schema of parse results."""
        return parse_result_schema()

    @mcp.resource("report://{path}")
    async def read_report(path: str) -> str:
        """Return the raw text of a report within AR_REPORT_BASE_DIR."""
        return await load_report(resolve_report_path(path))
