"""Domain models for the CT stowage sorter.

This package contains the grid primitives, the block/structure models produced
by the block parser, and the result models returned by the reorder engine and
the orchestrator.
"""

from .container_block import ContainerBlock, ReportStructure
from .grid import Grid, SheetSet, cell_text, copy_grid, get_cell, is_empty
from .processing_result import BlockPreview, ReorderResult, SortOutcome

__all__ = [
    # Grid primitives
    "Grid",
    "SheetSet",
    "cell_text",
    "copy_grid",
    "get_cell",
    "is_empty",
    # Report structure
    "ContainerBlock",
    "ReportStructure",
    # Results
    "BlockPreview",
    "ReorderResult",
    "SortOutcome",
]
