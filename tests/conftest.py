# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from ct_stowage.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        for var in ("CT_FULL_LIST", "CT_REPORT", "CT_OUTPUT"):
            monkeypatch.delenv(var, raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def make_workbook(temp_workdir: Path):
    """Factory writing {sheet: rows} to data/<name> without header/index."""
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        p = temp_workdir / "data" / name
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return p
    return _make


@pytest.fixture()
def full_list_rows() -> list[list[object]]:
    return [
        ["FULL REEFER LIST", "", ""],
        ["CONT ID", "SIZE", "STOWAGE"],
        ["MSKU1111111", "40RH", "03.02.82"],
        ["TGHU2222222", "40RH", "01.04.84"],
        ["CAIU3333333", "20RF", "02.00.86"],
    ]


@pytest.fixture()
def report_rows() -> list[list[object]]:
    # 3 ブロック (各 3 行) + ヘッダ 2 行。CAIU3333333 は FULL に存在しない想定で差し替え可
    return [
        ["CT MONITORING REPORT", "", ""],
        ["VESSEL", "VOY", "DATE"],
        ["MSKU1111111", "STOW", "00.00.00"],
        ["(1) SUPPLY", "-18.0", "-18.2"],
        ["(2) RETURN", "-17.5", "-17.9"],
        ["TGHU2222222", "STOW", "00.00.00"],
        ["(1) SUPPLY", "5.0", "5.1"],
        ["(2) RETURN", "4.8", "4.9"],
        ["ZZZU9999999", "STOW", "00.00.00"],
        ["(1) SUPPLY", "-25.0", "-25.1"],
        ["(2) RETURN", "-24.7", "-24.9"],
    ]
