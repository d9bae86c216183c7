from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from mcp_ar_report_server.core.report_service import (
    RESULT_SECTIONS,
    parse_report_file,
    select_sections,
)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ar-report",
        description="Parse an AR System log analyzer report into JSON.",
    )
    p.add_argument("report_path")
    p.add_argument(
        "--section",
        dest="sections",
        action="append",
        default=None,
        metavar="NAME",
        help=f"Only print this top-level section (repeatable). One of: {', '.join(RESULT_SECTIONS)}",
    )
    p.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2; 0 for compact)")
    return p


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    path = Path(args.report_path)

    try:
        result = asyncio.run(parse_report_file(path))
        data = select_sections(result, args.sections)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    print(json.dumps(data, indent=args.indent or None, ensure_ascii=False))


if __name__ == "__main__":
    main()
