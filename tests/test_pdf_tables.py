"""Row and section renderers."""

from __future__ import annotations

import pytest

from conftest import assert_pdf_contains
from pmreport.errors import ReportRenderError
from pmreport.report.pdf_layout import SECTION_ROW_H
from pmreport.report.pdf_primitives import FontHandle, PdfDocument
from pmreport.report.pdf_tables import draw_row, draw_section


def _doc() -> tuple[PdfDocument, FontHandle, FontHandle]:
    doc = PdfDocument.create()
    return doc, doc.embed_font("Times-Bold"), doc.embed_font("Times-Roman")


def test_draw_row_rejects_width_mismatch() -> None:
    doc, bold, regular = _doc()
    page = doc.add_page()
    with pytest.raises(ValueError, match="2 cells for 3 column widths"):
        draw_row(page, bold, regular, 40, 700, ["a", "b"], (10, 20, 30), 20)


def test_draw_row_renders_missing_cells_as_empty() -> None:
    doc, bold, regular = _doc()
    page = doc.add_page()
    draw_row(page, bold, regular, 40, 700, ["Label:", None, "Other:", ""], (100, 150, 80, 205), 20)
    pdf = doc.serialize()
    assert_pdf_contains(pdf, "(Label:) Tj")
    assert_pdf_contains(pdf, "(Other:) Tj")


def test_section_chaining_consumes_exact_height() -> None:
    doc, bold, regular = _doc()
    page = doc.add_page()
    sizes = [5, 6, 1, 1, 1, 5, 8, 1]
    y0 = 700.0
    y = y0
    for idx, n in enumerate(sizes):
        items = [(f"item {idx}.{k}", "", "") for k in range(n)]
        top = y
        y = draw_section(page, bold, regular, 40, y, f"Section {idx}", items)
        assert top - y == SECTION_ROW_H * n
    assert y0 - y == SECTION_ROW_H * sum(sizes)


def test_empty_section_draws_one_blank_row() -> None:
    doc, bold, regular = _doc()
    page = doc.add_page()
    y = draw_section(page, bold, regular, 40, 500, "Coolant", [])
    assert y == 500 - SECTION_ROW_H
    assert_pdf_contains(doc.serialize(), "(Coolant) Tj")


def test_short_section_items_are_padded() -> None:
    doc, bold, regular = _doc()
    page = doc.add_page()
    items = [("Only label",)]
    y = draw_section(page, bold, regular, 40, 500, "Odd", items)  # type: ignore[arg-type]
    assert y == 500 - SECTION_ROW_H


def test_closed_page_is_not_drawable() -> None:
    doc, bold, regular = _doc()
    first = doc.add_page()
    doc.add_page()
    with pytest.raises(ReportRenderError, match="page 1 is already closed"):
        draw_row(first, bold, regular, 40, 700, ["a"], (100,), 20)
