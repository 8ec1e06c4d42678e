from __future__ import annotations

from ..models.grid import Cell, cell_text, is_empty
from .rules import KEY_WIDTH, MISSING_KEY, NON_DIGIT_RE

"""Stowage key codec (BBRRTT).

Two derivations from the same loosely formatted stowage text:

- ``brt_key``: fixed-width sort key. Digits beyond the sixth are dropped so
  that string order equals (bay, row, tier) order for two-digit fields.
- ``display_stowage``: value written back into the report. Never truncated.

The two intentionally differ for over-long input (e.g. "1234567").
"""

__all__ = [
    "MISSING_KEY",
    "brt_key",
    "display_stowage",
]


def _digits(stowage: Cell) -> str:
    return NON_DIGIT_RE.sub("", cell_text(stowage))


def brt_key(stowage: Cell) -> str:
    """Sortable 6-digit key, or MISSING_KEY when stowage is absent.

    >>> brt_key("02.03.04")
    '020304'
    >>> brt_key("1234567")
    '123456'
    >>> brt_key(None)
    'ZZZZZZ'
    """
    if is_empty(stowage):
        return MISSING_KEY
    digits = _digits(stowage)
    if len(digits) > KEY_WIDTH:
        digits = digits[:KEY_WIDTH]
    return digits.rjust(KEY_WIDTH, "0")


def display_stowage(stowage: Cell) -> str:
    """Left-padded digits for display; empty string when absent."""
    if is_empty(stowage):
        return ""
    return _digits(stowage).rjust(KEY_WIDTH, "0")
