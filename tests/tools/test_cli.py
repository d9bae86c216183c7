from __future__ import annotations

import json
from pathlib import Path

import pytest

from mcp_ar_report_server.cli import main


def test_cli_prints_selected_sections(tmp_path: Path, write_report, v3_report: str, capsys) -> None:
    path = tmp_path / "report.txt"
    write_report(path, v3_report)

    main([str(path), "--section", "dashboard", "--indent", "0"])

    out = json.loads(capsys.readouterr().out)
    assert list(out) == ["dashboard"]
    assert out["dashboard"]["top_api_calls"][0]["identifier"] == "GET_ENTRY"


def test_cli_missing_file_exits_2(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.txt")])

    assert exc.value.code == 2
    assert "Report file not found" in capsys.readouterr().err


def test_cli_empty_report_exits_2(tmp_path: Path, write_report, capsys) -> None:
    path = tmp_path / "empty.txt"
    write_report(path, "\n\n")

    with pytest.raises(SystemExit) as exc:
        main([str(path)])

    assert exc.value.code == 2
    assert "empty output" in capsys.readouterr().err
