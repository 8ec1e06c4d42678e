from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from ct_stowage.cli import main as cli_main
from ct_stowage.documents.writer import ExportError

"""Exit code contract: 0 all matched / 2 some unmatched / 1 fatal."""

ARGS = ["--full-list", "data/full.xlsx", "--report", "data/ct.xlsx"]


def test_exit_code_fatal_without_inputs(temp_workdir: Path, capsys):
    assert cli_main([]) == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "ct_stowage.yml").write_text("unknown_key: 1\n", encoding="utf-8")
    assert cli_main(ARGS) == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_exit_code_fatal_unreadable_document(temp_workdir: Path, make_workbook, report_rows, capsys):
    make_workbook("ct.xlsx", {"CT": report_rows})
    (temp_workdir / "data" / "full.xlsx").write_bytes(b"garbage")
    assert cli_main(ARGS) == 1
    assert "ERROR processing:" in capsys.readouterr().out


def test_exit_code_all_matched(temp_workdir: Path, make_workbook, full_list_rows, report_rows):
    make_workbook("full.xlsx", {"List": full_list_rows})
    make_workbook("ct.xlsx", {"CT": report_rows[:8]})
    assert cli_main(ARGS) == 0


def test_exit_code_no_blocks_is_success(temp_workdir: Path, make_workbook, full_list_rows):
    make_workbook("full.xlsx", {"List": full_list_rows})
    make_workbook("ct.xlsx", {"CT": [["CT MONITORING REPORT"], ["no containers yet"]]})
    assert cli_main(ARGS) == 0


def test_exit_code_partial_match(temp_workdir: Path, make_workbook, full_list_rows, report_rows):
    make_workbook("full.xlsx", {"List": full_list_rows})
    make_workbook("ct.xlsx", {"CT": report_rows})
    assert cli_main(ARGS) == 2


def test_exit_code_fatal_on_export_error(temp_workdir: Path, make_workbook, full_list_rows, report_rows, capsys):
    make_workbook("full.xlsx", {"List": full_list_rows})
    make_workbook("ct.xlsx", {"CT": report_rows[:8]})
    with patch("ct_stowage.cli.__main__.export_sorted_grid", side_effect=ExportError("disk full")):
        assert cli_main(ARGS + ["--output", "out/x.xlsx"]) == 1
    assert "ERROR export: disk full" in capsys.readouterr().out
