"""Report loading and result shaping.

This module is the integration point between saved analyzer reports on disk
and the parser: it reads plain or gzip-compressed report files and narrows
parse results down to the sections a caller asked for.
"""

from __future__ import annotations

import asyncio
import gzip
import logging
import os
from collections.abc import Iterable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import aiofiles
from aiofiles.threadpool import wrap

from .models import ParseResult
from .report import parse_report
from .serialization import to_jsonable

logger = logging.getLogger(__name__)

ALLOWED_REPORT_SUFFIXES = {".txt", ".log", ".out", ".report"}
BASE_DIR_ENV = "AR_REPORT_BASE_DIR"
MAX_BYTES_ENV = "AR_REPORT_MAX_BYTES"
DEFAULT_MAX_BYTES = 64 * 1024 * 1024
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"

RESULT_SECTIONS = (
    "dashboard",
    "aggregates",
    "gaps",
    "exceptions",
    "thread_stats",
    "filters",
    "api_abbreviations",
    "queued_api_calls",
    "logging_activities",
    "file_metadata",
)


def base_dir() -> Path:
    """Return the resolved base directory reports are confined to."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def resolve_report_path(path: str | Path) -> Path:
    """Resolve ``path`` under the base directory; relative paths are taken from it."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError(f"Path escapes base dir ({base})")
    return p


def _effective_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".gz":
        suffix = path.with_suffix("").suffix.lower()
    return suffix


def ensure_allowed_suffix(path: Path) -> None:
    if _effective_suffix(path) not in ALLOWED_REPORT_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_REPORT_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed} (optionally .gz).")


def _max_bytes() -> int:
    env = os.getenv(MAX_BYTES_ENV)
    if not env:
        return DEFAULT_MAX_BYTES
    try:
        value = int(env)
    except ValueError as exc:
        raise ValueError(f"{MAX_BYTES_ENV} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{MAX_BYTES_ENV} must be >= 1")
    return value


@asynccontextmanager
async def _open_text(path: Path):
    """Open a report for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as f:
            yield f


async def load_report(path: str | Path) -> str:
    """Read a saved report file.

    Raises FileNotFoundError for a missing file and ValueError for a
    disallowed suffix or a file over the size limit.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Report file not found: {p}")
    ensure_allowed_suffix(p)

    limit = _max_bytes()
    size = p.stat().st_size
    if size > limit:
        raise ValueError(f"Report is {size} bytes; limit is {limit} ({MAX_BYTES_ENV})")

    async with _open_text(p) as f:
        text = await f.read()
    logger.debug("Loaded report %s (%d bytes on disk)", p, size)
    return text


async def parse_report_file(path: str | Path) -> ParseResult:
    """Load and parse a report file.

    Parsing runs in a worker thread so large reports do not stall the event loop.
    """
    text = await load_report(path)
    return await asyncio.to_thread(parse_report, text)


def _validate_sections(sections: Iterable[str]) -> list[str]:
    out: list[str] = []
    for s in sections:
        name = s.strip().lower()
        if not name:
            continue
        if name not in RESULT_SECTIONS:
            valid = ", ".join(RESULT_SECTIONS)
            raise ValueError(f"Unknown section '{s}'. Valid values: {valid}.")
        if name not in out:
            out.append(name)
    return out


def select_sections(result: ParseResult, sections: Iterable[str] | None = None) -> dict[str, Any]:
    """Return the JSON form of ``result``, restricted to ``sections`` when given.

    Section names are case-insensitive; an empty selection means everything.
    """
    data = to_jsonable(result)
    if sections is None:
        return data
    wanted = _validate_sections(sections)
    if not wanted:
        return data
    return {name: data[name] for name in wanted}
