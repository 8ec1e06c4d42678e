from __future__ import annotations

from ..models.grid import Cell, Row, cell_text
from .rules import CONTAINER_ID_RE

"""Container number recognition (ISO 6346 shape only, no check digit)."""

__all__ = [
    "detect_container_id",
    "first_container_id",
]


def detect_container_id(cell: Cell) -> str | None:
    """Return the normalized container id held by ``cell`` or None.

    >>> detect_container_id(" abcd1234567 ")
    'ABCD1234567'
    >>> detect_container_id("ABCD123456") is None
    True
    """
    text = cell_text(cell).strip().upper()
    if CONTAINER_ID_RE.fullmatch(text):
        return text
    return None


def first_container_id(row: Row | None) -> str | None:
    """First validating cell of a row, scanning left to right."""
    if not row:
        return None
    for value in row:
        found = detect_container_id(value)
        if found:
            return found
    return None
