from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..models.grid import Grid, SheetSet, is_empty
from .text_sources import read_docx_sheet_set, read_pdf_sheet_set

"""Document reader: any supported file -> SheetSet.

Spreadsheets are read with pandas without a header row (the CT report and
FULL lists both carry free-form preambles), so row ``r`` / column ``c`` of a
Grid is row ``r+1`` / column ``c+1`` of the sheet. PDF and DOCX documents are
reduced to a single synthetic sheet by ``text_sources``.

Cells are read as stored (text stays text, so "0012" keeps its zeros) and
empty cells become None. Every row keeps the sheet width: blank cells inside
the used range are injection targets. Fully empty rows are kept too: they
belong to CT blocks and dropping them would change block ranges.
"""

__all__ = [
    "DocumentError",
    "read_excel_file",
    "dataframe_to_grid",
    "load_sheet_set",
]

UNSUPPORTED_EXTENSIONS = {".doc"}


class DocumentError(Exception):
    """Raised when a document cannot be read or has no usable content."""


def read_excel_file(path: Path) -> dict[str, pd.DataFrame]:
    """Read every sheet of an Excel file into a raw DataFrame keyed by sheet name."""
    dfs: dict[str, pd.DataFrame] = {}
    # 既定 NA 変換は無効化: "NA" 等の文字列もセル値としてそのまま残す
    # dtype=object: 数字だけの文字列 ("010484") を数値に変換させない
    with pd.ExcelFile(path) as xls:
        for name in xls.sheet_names:
            df = xls.parse(name, header=None, dtype=object, keep_default_na=False, na_values=[""])
            dfs[str(name)] = df
    return dfs


def _normalize_value(val: Any) -> Any:
    if is_empty(val) or (not isinstance(val, str) and pd.isna(val)):
        return None
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, str):
        return val.strip()
    return val


def dataframe_to_grid(df: pd.DataFrame) -> Grid:
    """Convert a header-less DataFrame into a Grid, one row per sheet row at full width."""
    return [[_normalize_value(v) for v in raw] for raw in df.itertuples(index=False, name=None)]


def load_sheet_set(path: Path) -> SheetSet:
    """Load any supported document into an ordered SheetSet.

    Raises:
        DocumentError: missing file, unsupported format or unreadable content
    """
    if not path.exists():
        raise DocumentError(f"file not found: {path}")
    if not path.is_file():
        raise DocumentError(f"not a file: {path}")

    ext = path.suffix.lower()
    if ext in UNSUPPORTED_EXTENSIONS:
        raise DocumentError(f"unsupported document format '{ext}' ({path.name}); save it as .docx")
    try:
        if ext == ".pdf":
            return read_pdf_sheet_set(path.read_bytes())
        if ext == ".docx":
            return read_docx_sheet_set(path.read_bytes())
        # その他の拡張子はスプレッドシートとして扱う
        raw = read_excel_file(path)
    except DocumentError:
        raise
    except Exception as e:
        raise DocumentError(f"failed to read {path.name}: {e}") from e
    return {name: dataframe_to_grid(df) for name, df in raw.items()}
