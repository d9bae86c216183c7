from __future__ import annotations

import gzip
from collections.abc import Callable
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def fixture_lines(name: str) -> list[str]:
    return read_fixture(name).split("\n")


@pytest.fixture
def fixture_text() -> Callable[[str], str]:
    return read_fixture


@pytest.fixture
def v4_report() -> str:
    return read_fixture("v4_full_report.txt")


@pytest.fixture
def v3_report() -> str:
    return read_fixture("v3_report.txt")


@pytest.fixture
def write_report() -> Callable[[Path, str], None]:
    def _write(path: Path, text: str) -> None:
        if path.suffix == ".gz":
            with gzip.open(path, mode="wt", encoding="utf-8") as f:
                f.write(text)
        else:
            path.write_text(text, encoding="utf-8")

    return _write


@pytest.fixture
def load_lines() -> Callable[[str], list[str]]:
    return fixture_lines
