from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..models.container_block import ContainerBlock
from ..models.grid import Grid, cell_text, is_empty
from .rules import FALLBACK_ROW_LIMIT, PROBE_ANCHOR_TEXT, STOWAGE_CELL_RE, normalize_label

"""Stowage cell injection into a CT block.

CT block layouts vary between terminals, so the target cell is chosen by an
ordered list of strategies. Each strategy mutates ``rows`` in place and returns
True when it wrote the value, False when it does not apply. The first strategy
that applies wins; when none applies the block is left as is.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "InjectionStrategy",
    "overwrite_stowage_cell",
    "place_next_to_probe_anchor",
    "fill_first_empty_cell",
    "INJECTION_STRATEGIES",
    "inject_stowage",
]

InjectionStrategy = Callable[[Grid, ContainerBlock, str], bool]


def overwrite_stowage_cell(rows: Grid, block: ContainerBlock, display: str) -> bool:
    """Strategy 1: replace an existing "NN.NN.NN" / "NN NN NN" cell."""
    for r in range(block.start, block.end):
        row = rows[r]
        for c, value in enumerate(row):
            if is_empty(value):
                continue
            if STOWAGE_CELL_RE.fullmatch(cell_text(value).strip()):
                row[c] = display
                return True
    return False


def place_next_to_probe_anchor(rows: Grid, block: ContainerBlock, display: str) -> bool:
    """Strategy 2: write into the cell left of "(5) PROBE 3" (right if column 0).

    The neighbour is overwritten even when it already holds something.
    """
    for r in range(block.start, block.end):
        row = rows[r]
        for c, value in enumerate(row):
            if is_empty(value):
                continue
            if normalize_label(cell_text(value)) != PROBE_ANCHOR_TEXT:
                continue
            target = c - 1 if c > 0 else c + 1
            if target >= len(row):
                row.extend([None] * (target + 1 - len(row)))
            row[target] = display
            return True
    return False


def fill_first_empty_cell(rows: Grid, block: ContainerBlock, display: str) -> bool:
    """Strategy 3: first empty cell within the first FALLBACK_ROW_LIMIT rows.

    Later rows usually hold the footer / signature lines of the block.
    """
    last = min(block.end, block.start + FALLBACK_ROW_LIMIT)
    for r in range(block.start, last):
        row = rows[r]
        for c, value in enumerate(row):
            if is_empty(value):
                row[c] = display
                return True
    return False


INJECTION_STRATEGIES: tuple[InjectionStrategy, ...] = (
    overwrite_stowage_cell,
    place_next_to_probe_anchor,
    fill_first_empty_cell,
)


def inject_stowage(
    rows: Grid,
    block: ContainerBlock,
    display: str | None,
    strategies: Sequence[InjectionStrategy] = INJECTION_STRATEGIES,
) -> str | None:
    """Write ``display`` into the block; return the name of the strategy used.

    None means nothing was written (empty value or no target found).
    """
    if not display:
        return None
    for strategy in strategies:
        if strategy(rows, block, display):
            return strategy.__name__
    logger.debug(f"inject: no target cell in block {block.id} rows={block.start}..{block.end}")
    return None
