from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .container_block import ContainerBlock
from .grid import Grid

"""Processing result models for the CT stowage sorter.

ReorderResult carries the reordered grid plus block statistics produced by the
reorder engine. SortOutcome is the public invocation result: either a success
holding the ReorderResult and summary text, or a failure holding only an error
message (no partial output).
"""


@dataclass(frozen=True)
class BlockPreview:
    """Display-only view of a sorted block (used by summaries / --inspect)."""
    id: str
    key: str
    stowage: str | None  # 未解決なら None
    start: int
    end: int

    @classmethod
    def from_block(cls, block: ContainerBlock) -> BlockPreview:
        return cls(
            id=block.id,
            key=block.key or "",
            stowage=block.resolved_stowage,
            start=block.start,
            end=block.end,
        )


@dataclass(frozen=True)
class ReorderResult:
    """Output of the reorder engine.

    ``rows`` is the final grid: header + sorted blocks (after stowage
    injection) + tail. ``blocks`` are in sorted order.
    """
    rows: Grid
    total_blocks: int  # 検出ブロック数
    matched: int  # FULL リストで解決できたブロック数
    unmatched: int  # 解決できなかったブロック数
    blocks: list[ContainerBlock] = field(default_factory=list)
    preview: list[BlockPreview] = field(default_factory=list)
    header_row_count: int = 0
    tail_row_count: int = 0


@dataclass(frozen=True)
class SortOutcome:
    """Result of one full invocation (full list + report -> sorted grid)."""
    success: bool
    result: ReorderResult | None = None
    summary: str | None = None
    error: str | None = None
    stowage_map_size: int = 0  # FULL リストから得たコンテナ数
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    @classmethod
    def failure(
        cls, error: str, start_time: datetime | None = None, end_time: datetime | None = None
    ) -> SortOutcome:
        return cls(success=False, error=error, start_time=start_time, end_time=end_time)
