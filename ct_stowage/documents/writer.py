from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..models.grid import Grid

"""Sorted CT grid -> single-sheet .xlsx workbook."""

__all__ = [
    "DEFAULT_SHEET_NAME",
    "ExportError",
    "export_sorted_grid",
]

DEFAULT_SHEET_NAME = "CT_Sorted"


class ExportError(Exception):
    """Raised when the sorted grid cannot be written."""


def export_sorted_grid(rows: Grid, path: Path, sheet_name: str = DEFAULT_SHEET_NAME) -> Path:
    """Write ``rows`` verbatim (no header, no index) and return the path."""
    if not rows:
        raise ExportError("no sorted CT data available for export")
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(rows)
    try:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    except (OSError, ValueError) as e:
        raise ExportError(f"failed to write {path}: {e}") from e
    return path
