from __future__ import annotations

import logging

from ..models.container_block import ContainerBlock, ReportStructure
from ..models.grid import Grid
from .container_id import first_container_id

"""Block parser for the CT monitoring report.

The report has no fixed schema. The only structural cue is a container number
appearing somewhere in a row: such a row opens a block, and the block runs
until the next such row (or the end of the grid).

    rows[0:first_id_row]          header (preamble, never reordered)
    rows[start:end] per block     one container each, contiguous
    rows[last_end:]               tail
"""

logger = logging.getLogger(__name__)

__all__ = [
    "parse_blocks",
]


def parse_blocks(rows: Grid) -> ReportStructure:
    """Partition ``rows`` into header, container blocks and tail.

    A grid without any container number is returned as header only.
    """
    total = len(rows)
    i = 0
    # Header: ID を含む最初の行まで
    while i < total and first_container_id(rows[i]) is None:
        i += 1
    header_rows = rows[:i]

    blocks: list[ContainerBlock] = []
    while i < total:
        cid = first_container_id(rows[i])
        if cid is None:
            # 以降に ID 行なし -> tail
            break
        start = i
        i += 1
        while i < total and first_container_id(rows[i]) is None:
            i += 1
        blocks.append(ContainerBlock(id=cid, start=start, end=i))

    tail_rows = rows[i:]
    logger.debug(
        f"block parser: header_rows={len(header_rows)} blocks={len(blocks)} tail_rows={len(tail_rows)}"
    )
    return ReportStructure(rows=rows, header_rows=header_rows, blocks=blocks, tail_rows=tail_rows)
