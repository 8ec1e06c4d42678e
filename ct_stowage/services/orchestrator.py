from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..documents.reader import DocumentError, load_sheet_set
from ..models.grid import Grid, SheetSet
from ..models.processing_result import SortOutcome
from .block_parser import parse_blocks
from .progress import ProgressTracker
from .reorder import DEFAULT_PREVIEW_LIMIT, reorder_structure
from .stowage_map import build_stowage_map
from .summary import render_summary_text

"""Service orchestration for the CT stowage sorter.

process_ct_stowage() is the public entry point:
1. Load the FULL list and the CT report into SheetSets
2. Build the container -> stowage map from every FULL list sheet
3. Parse the first report sheet into header / blocks / tail
4. Resolve, inject and sort the blocks
5. Return a SortOutcome (success with grid + statistics, or failure message)

Document errors are fatal to the invocation only and never raise out of
process_ct_stowage().
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ProcessingError",
    "load_documents",
    "first_sheet",
    "process_ct_stowage",
]


class ProcessingError(Exception):
    """Raised when the inputs cannot produce a sorted report."""


def load_documents(paths: list[Path]) -> list[SheetSet]:
    """Load each document in order, advancing the progress bar per document."""
    sheet_sets: list[SheetSet] = []
    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_document(path)
            sheets = load_sheet_set(path)
            logger.debug(f"loaded {path.name}: sheets={list(sheets.keys())}")
            sheet_sets.append(sheets)
            progress.finish_document()
    return sheet_sets


def first_sheet(sheets: SheetSet, source: Path) -> tuple[str, Grid]:
    """The CT report is always the first sheet of the monitoring document."""
    if not sheets:
        raise ProcessingError(f"monitoring report has no sheets: {source.name}")
    name, rows = next(iter(sheets.items()))
    if not rows:
        raise ProcessingError(f"monitoring report sheet '{name}' is empty: {source.name}")
    return name, rows


def process_ct_stowage(
    full_list_path: Path,
    report_path: Path,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> SortOutcome:
    """Sort the CT report blocks by the stowage found in the FULL list.

    Args:
        full_list_path: FULL reefer list (stowage + container id columns)
        report_path: CT monitoring report (one multi-row block per container)
        preview_limit: number of sorted blocks kept in the preview

    Returns:
        SortOutcome; ``success=False`` carries a human readable ``error``
    """
    start_time = datetime.now(UTC)
    try:
        full_sheets, report_sheets = load_documents([full_list_path, report_path])
        sheet_name, rows = first_sheet(report_sheets, report_path)
    except (DocumentError, ProcessingError) as e:
        logger.error(f"input: {e}")
        return SortOutcome.failure(str(e), start_time=start_time, end_time=datetime.now(UTC))

    stowage_map = build_stowage_map(full_sheets)
    logger.info(f"stowage map: {len(stowage_map)} containers from {full_list_path.name}")
    if not stowage_map:
        logger.warning(f"no STOWAGE / CONT ID table found in {full_list_path.name}")

    structure = parse_blocks(rows)
    logger.info(
        f"report '{sheet_name}': header_rows={len(structure.header_rows)} "
        f"blocks={len(structure.blocks)} tail_rows={len(structure.tail_rows)}"
    )

    result = reorder_structure(structure, stowage_map, preview_limit=preview_limit)
    if result.unmatched:
        missing = [b.id for b in result.blocks if not b.matched]
        logger.info(f"not found in FULL list: {', '.join(missing)}")

    return SortOutcome(
        success=True,
        result=result,
        summary=render_summary_text(result),
        stowage_map_size=len(stowage_map),
        start_time=start_time,
        end_time=datetime.now(UTC),
    )
