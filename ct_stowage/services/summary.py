from __future__ import annotations

from ..models.processing_result import BlockPreview, ReorderResult, SortOutcome

"""Summary rendering for the CT stowage sorter.

Two outputs, both derived from ReorderResult only:

- ``render_summary_text``: the multi-line, human readable summary shown to the
  operator after a run.
- ``render_summary_fields``: the key=value body of the SUMMARY line, stable
  format so that it can be grepped from batch logs. The SUMMARY label is added
  by the logging formatter.
"""

__all__ = [
    "render_summary_text",
    "render_summary_fields",
    "render_preview_lines",
]


def render_summary_text(result: ReorderResult) -> str:
    """Render the operator summary.

    Examples:
        >>> r = ReorderResult(rows=[], total_blocks=3, matched=2, unmatched=1)
        >>> print(render_summary_text(r))
        CT Stowage Processing Summary:
        • Total CT containers detected: 3
        • Matched with stowage in FULL list: 2
        • Not found in FULL list: 1
        • Containers sorted by Bay-Row-Tier position
        • Stowage positions updated in CT blocks
    """
    lines = [
        "CT Stowage Processing Summary:",
        f"• Total CT containers detected: {result.total_blocks}",
        f"• Matched with stowage in FULL list: {result.matched}",
        f"• Not found in FULL list: {result.unmatched}",
        "• Containers sorted by Bay-Row-Tier position",
        "• Stowage positions updated in CT blocks",
    ]
    return "\n".join(lines)


def _format_elapsed(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # 指数表記回避
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_fields(outcome: SortOutcome) -> str:
    """Render the key=value body of the SUMMARY line for a successful outcome.

    Format:
    blocks={n} matched={m} unmatched={k} header_rows={h} tail_rows={t}
    stowage_map={s} elapsed_sec={e}
    """
    result = outcome.result
    if result is None:
        raise ValueError("cannot render SUMMARY line without a reorder result")
    return (
        f"blocks={result.total_blocks} "
        f"matched={result.matched} "
        f"unmatched={result.unmatched} "
        f"header_rows={result.header_row_count} "
        f"tail_rows={result.tail_row_count} "
        f"stowage_map={outcome.stowage_map_size} "
        f"elapsed_sec={_format_elapsed(outcome.elapsed_seconds)}"
    )


def render_preview_lines(preview: list[BlockPreview]) -> list[str]:
    """One line per previewed block: position, id, key, resolved stowage."""
    lines = []
    for i, p in enumerate(preview, start=1):
        stow = p.stowage if p.stowage is not None else "-"
        lines.append(f"{i:>2}. {p.id} key={p.key} stowage={stow} rows={p.start}..{p.end}")
    return lines
