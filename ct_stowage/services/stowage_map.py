from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..models.grid import Grid, Row, SheetSet, cell_text, get_cell, is_empty
from .container_id import detect_container_id
from .rules import CONTAINER_HEADER_RULES, HEADER_SCAN_ROWS, STOWAGE_HEADER_TOKENS

"""Stowage map builder (FULL reefer list -> container id -> raw stowage).

Each sheet is scanned independently for a header exposing a stowage column
and a container id column. Sheets without such a header are skipped silently;
FULL lists often carry cover / summary sheets.

Duplicates: first occurrence wins, within a sheet and across sheets.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "HeaderMatch",
    "find_header",
    "build_stowage_map",
    "extend_stowage_map",
]


@dataclass(frozen=True)
class HeaderMatch:
    row: int  # ヘッダ行 (0-based)
    stowage_col: int
    container_col: int


def _is_stowage_label(label: str) -> bool:
    return any(token in label for token in STOWAGE_HEADER_TOKENS)


def _is_container_label(label: str) -> bool:
    return any(all(token in label for token in rule) for rule in CONTAINER_HEADER_RULES)


def find_header(rows: Grid) -> HeaderMatch | None:
    """Locate the header row within the first HEADER_SCAN_ROWS rows.

    Column indices are sticky across rows: a two-line header (e.g. "CONT ID"
    on one row, "STOWAGE" below it) is accepted at the row where the second
    index becomes known. Within a row the right-most matching cell wins.
    """
    stowage_col = -1
    container_col = -1
    for r, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        for c, value in enumerate(row or []):
            label = cell_text(value).upper()
            if _is_stowage_label(label):
                stowage_col = c
            if _is_container_label(label):
                container_col = c
        if stowage_col != -1 and container_col != -1:
            return HeaderMatch(row=r, stowage_col=stowage_col, container_col=container_col)
    return None


def _iter_pairs(rows: Grid, header: HeaderMatch) -> Iterable[tuple[str, str]]:
    for row in rows[header.row + 1:]:
        row_: Row = row or []
        cid = detect_container_id(get_cell(row_, header.container_col))
        if not cid:
            continue
        stow = get_cell(row_, header.stowage_col)
        if is_empty(stow):
            continue
        yield cid, cell_text(stow).strip()


def extend_stowage_map(stowage_map: dict[str, str], sheet_name: str, rows: Grid) -> int:
    """Add one sheet's pairs to ``stowage_map`` (first-seen wins).

    Returns the number of newly recorded containers.
    """
    header = find_header(rows)
    if header is None:
        logger.debug(f"stowage map: sheet '{sheet_name}' has no STOWAGE/CONT ID header, skipped")
        return 0
    added = 0
    for cid, stow in _iter_pairs(rows, header):
        if cid in stowage_map:
            continue
        stowage_map[cid] = stow
        added += 1
    logger.debug(
        f"stowage map: sheet '{sheet_name}' header_row={header.row} "
        f"stowage_col={header.stowage_col} id_col={header.container_col} added={added}"
    )
    return added


def build_stowage_map(sheets: SheetSet) -> dict[str, str]:
    """Merge every sheet of the FULL list into a single lookup (sheet order)."""
    stowage_map: dict[str, str] = {}
    for sheet_name, rows in sheets.items():
        if not rows:
            continue
        extend_stowage_map(stowage_map, sheet_name, rows)
    return stowage_map
