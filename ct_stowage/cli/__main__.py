from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ct_stowage.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    SorterConfig,
    apply_env_overrides,
    load_config,
)
from ct_stowage.documents.reader import DocumentError, load_sheet_set
from ct_stowage.documents.writer import ExportError, export_sorted_grid
from ct_stowage.logging.init import log_summary, setup_logging
from ct_stowage.services.block_parser import parse_blocks
from ct_stowage.services.orchestrator import process_ct_stowage
from ct_stowage.services.stowage_map import find_header
from ct_stowage.services.summary import render_preview_lines, render_summary_fields

"""CLI entrypoint.

Flow:
- Load .env (override) then YAML config, then apply CLI options
- Sort the CT report using the FULL list
- Optionally write the sorted workbook
- Print the summary and the SUMMARY line

Exit codes: 0 all blocks matched, 2 some blocks not found in the FULL list,
1 fatal (config / document / export error).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_MATCH = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process env)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sort CT monitoring blocks by Bay-Row-Tier stowage")
    p.add_argument("--full-list", help="FULL reefer list (.xlsx/.xls/.pdf/.docx)")
    p.add_argument("--report", help="CT monitoring report (first sheet is sorted)")
    p.add_argument("--output", help="Write the sorted report to this .xlsx")
    p.add_argument("--config", help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect", action="store_true", help="Print detected document structure then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> SorterConfig:
    if args.config:
        cfg = load_config(Path(args.config))
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = SorterConfig()
    cfg = apply_env_overrides(cfg)
    return SorterConfig(
        full_list=args.full_list or cfg.full_list,
        report=args.report or cfg.report,
        output=args.output or cfg.output,
        output_sheet=cfg.output_sheet,
        preview_limit=cfg.preview_limit,
    )


def _inspect(cfg: SorterConfig) -> int:
    for label, raw_path in (("FULL", cfg.full_list), ("REPORT", cfg.report)):
        if not raw_path:
            continue
        path = Path(raw_path)
        print(f"{label}: {path.name}")
        try:
            sheets = load_sheet_set(path)
        except DocumentError as e:
            print(f"  read_error: {e}")
            return EXIT_FATAL
        for sname, rows in sheets.items():
            header = find_header(rows)
            if header is None:
                print(f"  SHEET: {sname} rows={len(rows)} stowage_header=none")
            else:
                print(
                    f"  SHEET: {sname} rows={len(rows)} stowage_header=row{header.row} "
                    f"stowage_col={header.stowage_col} id_col={header.container_col}"
                )
        if label == "REPORT" and sheets:
            sname, rows = next(iter(sheets.items()))
            structure = parse_blocks(rows)
            print(
                f"  BLOCKS: sheet={sname} header_rows={len(structure.header_rows)} "
                f"blocks={len(structure.blocks)} tail_rows={len(structure.tail_rows)}"
            )
            for b in structure.blocks[: cfg.preview_limit]:
                print(f"    {b.id} rows={b.start}..{b.end}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    # 空リスト [] を渡された場合に sys.argv を読まないよう None のみ判定
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect:
        return _inspect(cfg)

    if not cfg.full_list or not cfg.report:
        logger.error("config: both a FULL list and a CT report are required (--full-list / --report)")
        return EXIT_FATAL

    logger.info(f"FULL list: {cfg.full_list}")
    logger.info(f"CT report: {cfg.report}")
    outcome = process_ct_stowage(Path(cfg.full_list), Path(cfg.report), preview_limit=cfg.preview_limit)
    if not outcome.success or outcome.result is None:
        logger.error(f"processing: {outcome.error}")
        return EXIT_FATAL

    result = outcome.result
    for line in (outcome.summary or "").splitlines():
        logger.info(line)
    for line in render_preview_lines(result.preview):
        logger.debug(line)

    if cfg.output:
        try:
            written = export_sorted_grid(result.rows, Path(cfg.output), sheet_name=cfg.output_sheet)
        except ExportError as e:
            logger.error(f"export: {e}")
            return EXIT_FATAL
        logger.info(f"sorted report written: {written}")

    log_summary(render_summary_fields(outcome))

    if result.unmatched > 0:
        return EXIT_PARTIAL_MATCH
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
