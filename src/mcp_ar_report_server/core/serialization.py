"""JSON conversion for parse results."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter

from .models import ParseResult


@lru_cache(maxsize=1)
def _adapter() -> TypeAdapter[ParseResult]:
    return TypeAdapter(ParseResult)


def to_jsonable(result: ParseResult) -> dict[str, Any]:
    """Convert a result into plain JSON types (timestamps as ISO-8601 strings)."""
    return _adapter().dump_python(result, mode="json")


def to_json(result: ParseResult, *, indent: int | None = None) -> str:
    return _adapter().dump_json(result, indent=indent).decode("utf-8")


def parse_result_schema() -> dict[str, Any]:
    """Return the JSON schema describing ``ParseResult``."""
    return _adapter().json_schema()
