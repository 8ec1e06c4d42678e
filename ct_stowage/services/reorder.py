from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from ..models.container_block import ContainerBlock, ReportStructure
from ..models.grid import Grid, copy_grid, is_empty
from ..models.processing_result import BlockPreview, ReorderResult
from .block_parser import parse_blocks
from .cell_injector import inject_stowage
from .stowage_key import brt_key, display_stowage

"""Reorder engine: resolve, inject, sort, rebuild.

All intermediate state lives in a ReorderContext created per call. The context
owns a row-level copy of the report grid, so the caller's grid is never
mutated and running twice on the same inputs gives the same result.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_PREVIEW_LIMIT",
    "ReorderContext",
    "resolve_blocks",
    "rebuild_rows",
    "reorder_report",
    "reorder_structure",
]

DEFAULT_PREVIEW_LIMIT = 10


@dataclass
class ReorderContext:
    """Per-invocation working state (never shared between calls)."""
    rows: Grid  # 作業用コピー (セル書き込み対象)
    structure: ReportStructure
    stowage_map: Mapping[str, str]
    resolved: list[ContainerBlock] = field(default_factory=list)
    matched: int = 0
    unmatched: int = 0
    injected: int = 0

    @classmethod
    def create(cls, structure: ReportStructure, stowage_map: Mapping[str, str]) -> ReorderContext:
        return cls(rows=copy_grid(structure.rows), structure=structure, stowage_map=stowage_map)


def resolve_blocks(ctx: ReorderContext) -> list[ContainerBlock]:
    """Lookup + inject + key for each block, in original order."""
    for block in ctx.structure.blocks:
        stow = ctx.stowage_map.get(block.id)
        if is_empty(stow):
            stow = None
        if stow is None:
            ctx.unmatched += 1
        else:
            ctx.matched += 1
        if inject_stowage(ctx.rows, block, display_stowage(stow)):
            ctx.injected += 1
        ctx.resolved.append(replace(block, key=brt_key(stow), resolved_stowage=stow))
    return ctx.resolved


def rebuild_rows(ctx: ReorderContext, ordered: list[ContainerBlock]) -> Grid:
    """header + rows of each block in ``ordered`` + tail."""
    structure = ctx.structure
    new_rows: Grid = list(ctx.rows[:len(structure.header_rows)])
    for block in ordered:
        new_rows.extend(ctx.rows[block.start:block.end])
    new_rows.extend(ctx.rows[structure.block_rows_end:])
    return new_rows


def reorder_structure(
    structure: ReportStructure,
    stowage_map: Mapping[str, str],
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> ReorderResult:
    """Sort the blocks of an already parsed report by BRT key."""
    ctx = ReorderContext.create(structure, stowage_map)
    resolved = resolve_blocks(ctx)
    # sorted() は安定ソート: 同一キーは元の順序を維持
    ordered = sorted(resolved, key=lambda b: b.key or "")
    new_rows = rebuild_rows(ctx, ordered)
    logger.debug(
        f"reorder: blocks={len(ordered)} matched={ctx.matched} "
        f"unmatched={ctx.unmatched} injected={ctx.injected}"
    )
    return ReorderResult(
        rows=new_rows,
        total_blocks=len(ordered),
        matched=ctx.matched,
        unmatched=ctx.unmatched,
        blocks=ordered,
        preview=[BlockPreview.from_block(b) for b in ordered[:preview_limit]],
        header_row_count=len(structure.header_rows),
        tail_row_count=len(structure.tail_rows),
    )


def reorder_report(
    rows: Grid,
    stowage_map: Mapping[str, str],
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> ReorderResult:
    """Parse ``rows`` into blocks and return the BRT-sorted grid."""
    return reorder_structure(parse_blocks(rows), stowage_map, preview_limit=preview_limit)
