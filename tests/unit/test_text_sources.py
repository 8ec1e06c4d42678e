from __future__ import annotations

import io
from unittest.mock import MagicMock, patch

from docx import Document

from ct_stowage.documents.text_sources import (
    TEXT_SHEET_HEADER,
    extract_docx_text,
    extract_pdf_text,
    parse_docx_text,
    parse_pdf_text,
    read_docx_sheet_set,
)
from ct_stowage.services.stowage_map import build_stowage_map


PDF_TEXT = """REEFER LIST VOY 012E
1 ABCD1234567 40RH -18.0 02.03.04
2 EFGH7654321 IJKL1111111 20RF 5.0 01 02 82

3 MNOP222222 40RH 0.0 03.04.06
continued 120486
"""


def test_parse_pdf_text_rows():
    rows = parse_pdf_text(PDF_TEXT)
    assert rows[0] == TEXT_SHEET_HEADER
    assert rows[1] == ["ABCD1234567", "02.03.04", "1 ABCD1234567 40RH -18.0 02.03.04"]
    assert rows[2][:2] == ["EFGH7654321", "01 02 82"]
    assert rows[3][:2] == ["IJKL1111111", "01 02 82"]
    # 6 digit ids are kept here; the recognizer rejects them later
    assert rows[4][:2] == ["MNOP222222", "03.04.06"]
    assert rows[5] == ["", "continued 120486", ""]
    assert len(rows) == 6


def test_pdf_rows_feed_the_stowage_map():
    sheets = {"PDF_Data": parse_pdf_text(PDF_TEXT)}
    assert build_stowage_map(sheets) == {
        "ABCD1234567": "02.03.04",
        "EFGH7654321": "01 02 82",
        "IJKL1111111": "01 02 82",
    }


def test_extract_pdf_text_joins_pages():
    page1 = MagicMock()
    page1.extract_text.return_value = "ABCD1234567 02.03.04"
    page2 = MagicMock()
    page2.extract_text.return_value = None
    pdf = MagicMock()
    pdf.pages = [page1, page2]
    pdf.__enter__.return_value = pdf
    with patch("ct_stowage.documents.text_sources.pdfplumber.open", return_value=pdf):
        assert extract_pdf_text(b"%PDF") == "ABCD1234567 02.03.04\n"


def _docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("Reefer stowage instructions")
    table = doc.add_table(rows=2, cols=3)
    for cell, text in zip(table.rows[0].cells, ["CONT", "POS", "TEMP"]):
        cell.text = text
    for cell, text in zip(table.rows[1].cells, ["ABCD1234567", "02.03.04", "-18"]):
        cell.text = text
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_extract_docx_text_includes_tables():
    text = extract_docx_text(_docx_bytes())
    assert "Reefer stowage instructions" in text
    assert "ABCD1234567 02.03.04 -18" in text


def test_read_docx_sheet_set():
    sheets = read_docx_sheet_set(_docx_bytes())
    rows = sheets["DOCX_Data"]
    assert rows[0] == TEXT_SHEET_HEADER
    assert rows[1][:2] == ["ABCD1234567", "02.03.04"]


def test_parse_docx_text_six_digit_fallback_ignores_container_digits():
    rows = parse_docx_text("unit EFGH7654321 at bay 120486 checked")
    assert rows[1][:2] == ["EFGH7654321", "120486"]


def test_parse_docx_text_without_stowage():
    rows = parse_docx_text("EFGH7654321 no position yet")
    assert rows[1] == ["EFGH7654321", "", "EFGH7654321 no position yet"]
