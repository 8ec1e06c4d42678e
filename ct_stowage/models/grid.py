from __future__ import annotations

import math
from typing import Any

"""Grid / SheetSet primitives shared by every stage.

A Grid is a plain ``list[list[Any]]``: rows are ordered, cells are indexed by
column, and rows may have different lengths (missing columns read as empty).
A SheetSet keeps sheet order as discovered in the source document.

Cells are compared as text in almost every heuristic, so the conversions live
here instead of being repeated at each call site.
"""

__all__ = [
    "Cell",
    "Row",
    "Grid",
    "SheetSet",
    "is_empty",
    "cell_text",
    "get_cell",
    "copy_grid",
]

Cell = Any
Row = list[Cell]
Grid = list[Row]
SheetSet = dict[str, Grid]


def is_empty(value: Cell) -> bool:
    """True for None, NaN and blank (whitespace-only) strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def cell_text(value: Cell) -> str:
    """Render a cell as text the way a spreadsheet user would read it.

    Integral floats lose their ``.0`` (pandas widens int columns containing
    blanks to float64, which would otherwise add a spurious digit to stowage
    codes).
    """
    if is_empty(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_cell(row: Row | None, col: int) -> Cell:
    if row is None or col < 0 or col >= len(row):
        return None
    return row[col]


def copy_grid(rows: Grid) -> Grid:
    """Row-level copy: cells are scalars so a shallow copy per row is enough."""
    return [list(row) if row is not None else [] for row in rows]
