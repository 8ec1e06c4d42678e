from __future__ import annotations

import re

"""Structural inference rules for CT reports and FULL reefer lists.

Every pattern and limit used to infer structure from a grid is declared here,
in the order it is consulted. Each rule is applied by exactly one service:

Container recognition (container_id.py)
    CONTAINER_ID_RE        upper/trimmed cell text, full match, 4 letters + 7 digits

Stowage key codec (stowage_key.py)
    NON_DIGIT_RE           removed before key/display derivation
    KEY_WIDTH              6 digits = BB RR TT
    MISSING_KEY            sorts after every numeric key ('Z' > '9')

Header detection (stowage_map.py), scanned within HEADER_SCAN_ROWS rows
    STOWAGE_HEADER_TOKENS  any token in upper text -> stowage column
    CONTAINER_HEADER_RULES any rule (all tokens present) -> container id column

Cell injection (cell_injector.py), priority order
    1. STOWAGE_CELL_RE     existing "NN.NN.NN"/"NN NN NN" cell is overwritten
    2. PROBE_ANCHOR_TEXT   cell left of the anchor (right when in column 0)
    3. FALLBACK_ROW_LIMIT  first empty cell within the first N block rows

Text sources (documents/text_sources.py)
    LOOSE_CONTAINER_RE     ids inside free text (6 or 7 digits, like the lists)
    STOWAGE_TEXT_RE        stowage inside free text
    SIX_DIGIT_RE           bare 6 digit stowage
"""

__all__ = [
    "CONTAINER_ID_RE",
    "NON_DIGIT_RE",
    "KEY_WIDTH",
    "MISSING_KEY",
    "HEADER_SCAN_ROWS",
    "STOWAGE_HEADER_TOKENS",
    "CONTAINER_HEADER_RULES",
    "STOWAGE_CELL_RE",
    "PROBE_ANCHOR_TEXT",
    "FALLBACK_ROW_LIMIT",
    "WHITESPACE_RE",
    "LOOSE_CONTAINER_RE",
    "STOWAGE_TEXT_RE",
    "SIX_DIGIT_RE",
    "normalize_label",
]

CONTAINER_ID_RE = re.compile(r"[A-Z]{4}[0-9]{7}")

NON_DIGIT_RE = re.compile(r"[^0-9]")
KEY_WIDTH = 6
MISSING_KEY = "Z" * KEY_WIDTH

HEADER_SCAN_ROWS = 15
STOWAGE_HEADER_TOKENS: tuple[str, ...] = ("STOWAGE",)
CONTAINER_HEADER_RULES: tuple[tuple[str, ...], ...] = (
    ("CONTAINER",),
    ("CONT", "ID"),
)

STOWAGE_CELL_RE = re.compile(r"[0-9]{2}[\s.][0-9]{2}[\s.][0-9]{2}")
PROBE_ANCHOR_TEXT = "(5) PROBE 3"
FALLBACK_ROW_LIMIT = 8

WHITESPACE_RE = re.compile(r"\s+")

LOOSE_CONTAINER_RE = re.compile(r"[A-Z]{4}[0-9]{6,7}")
STOWAGE_TEXT_RE = re.compile(r"[0-9]{2}[\s.][0-9]{2}[\s.][0-9]{2}")
SIX_DIGIT_RE = re.compile(r"[0-9]{6}")


def normalize_label(text: str) -> str:
    """Upper-case, trim and collapse internal whitespace (anchor comparison)."""
    return WHITESPACE_RE.sub(" ", text.strip().upper())
