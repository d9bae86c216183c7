"""Module entrypoint.

Allows:
    python -m mcp_ar_report_server
"""

from __future__ import annotations

from mcp_ar_report_server.server.report_server import main

if __name__ == "__main__":
    main()
