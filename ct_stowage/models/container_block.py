from __future__ import annotations

from dataclasses import dataclass, field

from .grid import Grid

"""ContainerBlock / ReportStructure models for the CT monitoring report.

A block is the contiguous row range [start, end) belonging to one container.
The parser only knows id/start/end; the reorder engine completes key and
resolved_stowage on a copy (blocks are frozen).
"""

__all__ = [
    "ContainerBlock",
    "ReportStructure",
]


@dataclass(frozen=True)
class ContainerBlock:
    """One container's multi-row record inside the report grid."""
    id: str  # 正規化済コンテナ番号 (AAAA1234567)
    start: int  # 開始行 (inclusive)
    end: int  # 終了行 (exclusive)
    key: str | None = None  # BRT ソートキー (6桁 or ZZZZZZ)
    resolved_stowage: str | None = None  # FULL リスト由来の生ストウェッジ文字列

    @property
    def row_count(self) -> int:
        return self.end - self.start

    @property
    def matched(self) -> bool:
        return bool(self.resolved_stowage)


@dataclass(frozen=True)
class ReportStructure:
    """Header / blocks / tail partition of a single report grid.

    ``rows`` is the grid the partition was computed from; header_rows and
    tail_rows are slices of it and are never reordered.
    """
    rows: Grid
    header_rows: Grid = field(default_factory=list)
    blocks: list[ContainerBlock] = field(default_factory=list)
    tail_rows: Grid = field(default_factory=list)

    @property
    def block_rows_end(self) -> int:
        """Index of the first tail row (== len(rows) minus tail length)."""
        if not self.blocks:
            return len(self.header_rows)
        return self.blocks[-1].end
