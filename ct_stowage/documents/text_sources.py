from __future__ import annotations

import io
import re

import pdfplumber
from docx import Document

from ..models.grid import Grid, SheetSet
from ..services.rules import LOOSE_CONTAINER_RE, SIX_DIGIT_RE, STOWAGE_TEXT_RE, WHITESPACE_RE

"""Text based sources (PDF / DOCX) -> single-sheet SheetSet.

Neither format carries a reliable table structure after extraction, so both
are reduced to rows of ``[container id, stowage, context]`` under a fixed
header that the stowage map builder recognizes:

    Container ID | Stowage | Additional Data

PDF: one row per container id found on a text line, stowage = first
stowage-looking token on the same line. Lines with a stowage but no id are
kept with the whole line in the stowage column.

DOCX: paragraphs and table rows are flattened to one text; each id takes the
first stowage-looking token within +-CONTEXT_CHARS characters.
"""

__all__ = [
    "TEXT_SHEET_HEADER",
    "PDF_SHEET_NAME",
    "DOCX_SHEET_NAME",
    "CONTEXT_CHARS",
    "extract_pdf_text",
    "parse_pdf_text",
    "extract_docx_text",
    "parse_docx_text",
    "read_pdf_sheet_set",
    "read_docx_sheet_set",
]

TEXT_SHEET_HEADER = ["Container ID", "Stowage", "Additional Data"]
PDF_SHEET_NAME = "PDF_Data"
DOCX_SHEET_NAME = "DOCX_Data"
CONTEXT_CHARS = 100


def extract_pdf_text(pdf_bytes: bytes) -> str:
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        parts: list[str] = []
        for page in pdf.pages:
            parts.append(page.extract_text() or "")
        return "\n".join(parts)


def _find_stowage(text: str, allow_bare: bool) -> re.Match[str] | None:
    # container numbers are blanked first: their digits would read as stowage
    scrubbed = LOOSE_CONTAINER_RE.sub(lambda m: " " * len(m.group(0)), text)
    found = STOWAGE_TEXT_RE.search(scrubbed)
    if found is None and allow_bare:
        found = SIX_DIGIT_RE.search(scrubbed)
    return found


def parse_pdf_text(text: str) -> Grid:
    rows: Grid = [list(TEXT_SHEET_HEADER)]
    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        ids = LOOSE_CONTAINER_RE.findall(trimmed)
        stow_match = _find_stowage(trimmed, allow_bare=False)
        if ids:
            stow = stow_match.group(0) if stow_match else ""
            for cid in ids:
                rows.append([cid, stow, trimmed])
        elif stow_match or SIX_DIGIT_RE.search(trimmed):
            rows.append(["", trimmed, ""])
    return rows


def extract_docx_text(docx_bytes: bytes) -> str:
    """Paragraph text followed by table rows (cells joined with spaces)."""
    doc = Document(io.BytesIO(docx_bytes))
    parts: list[str] = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            parts.append(" ".join(cell.text.strip() for cell in row.cells))
    return "\n".join(parts)


def parse_docx_text(text: str) -> Grid:
    rows: Grid = [list(TEXT_SHEET_HEADER)]
    for match in LOOSE_CONTAINER_RE.finditer(text):
        lo = max(0, match.start() - CONTEXT_CHARS)
        context = WHITESPACE_RE.sub(" ", text[lo:match.start() + CONTEXT_CHARS]).strip()
        stow_match = _find_stowage(context, allow_bare=True)
        stow = stow_match.group(0) if stow_match else ""
        rows.append([match.group(0), stow, context])
    return rows


def read_pdf_sheet_set(pdf_bytes: bytes) -> SheetSet:
    return {PDF_SHEET_NAME: parse_pdf_text(extract_pdf_text(pdf_bytes))}


def read_docx_sheet_set(docx_bytes: bytes) -> SheetSet:
    return {DOCX_SHEET_NAME: parse_docx_text(extract_docx_text(docx_bytes))}
