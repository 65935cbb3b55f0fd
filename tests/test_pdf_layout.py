"""Layout constants and text-fitting helpers."""

from __future__ import annotations

import pytest

from pmreport.report import pdf_layout as L
from pmreport.report.pdf_primitives import PAGE_W, FontHandle


@pytest.mark.parametrize("name", sorted(L.ROW_TABLES))
def test_row_widths_fill_their_table(name: str) -> None:
    widths, table_w = L.ROW_TABLES[name]
    assert sum(widths) == table_w


def test_content_widths_match_page_margins() -> None:
    assert L.PAGE2_CONTENT_W == PAGE_W - 2 * L.MARGIN_X == 515
    assert L.PAGE1_CONTENT_W == L.HEADER_BAR_W == 535
    assert L.LEFT_COL_X + L.LEFT_COL_W <= L.RIGHT_COL_X
    assert L.RIGHT_COL_X + L.RIGHT_COL_W == L.MARGIN_X + L.PAGE2_CONTENT_W


def test_footer_stack_is_ordered() -> None:
    assert L.SIGNATURE_IMAGE_Y + L.SIGNATURE_MAX_H < L.IMAGES_LINK_Y
    assert L.IMAGES_LINK_Y < L.AIR_TABLE_FLOOR_Y
    assert L.PARTS_FLOOR_Y == L.AIR_TABLE_FLOOR_Y + L.AIR_TABLE_H + L.AIR_TABLE_GAP


@pytest.mark.parametrize(
    "description",
    [
        "",
        "Spare filter set",
        "x" * 30,
        "x" * 31,
        "Integrator rod cleaning kit with replacement gaskets and seals",
    ],
)
def test_part_description_split_law(description: str) -> None:
    lines = L.split_part_description(description)
    assert len(lines) == (1 if len(description) <= 30 else 2)
    assert "".join(lines) == description
    if len(lines) == 2:
        assert lines[1] == description[30:]


def test_wrap_text_caps_lines_with_ellipsis() -> None:
    font = FontHandle("Times-Roman")
    text = " ".join(["maintenance"] * 200)
    lines = L.wrap_text(text, font, 8, 100, max_lines=3)
    assert len(lines) == 3
    assert lines[-1].endswith("…")
    assert all(font.width(line, 8) <= 100 for line in lines)


def test_wrap_text_keeps_short_text() -> None:
    font = FontHandle("Times-Roman")
    assert L.wrap_text("Low dust.", font, 8, 300, max_lines=3) == ["Low dust."]


def test_row_text_y_centres_in_row() -> None:
    assert L.row_text_y(700, 20) == 687
    assert L.row_text_y(700, 40) == 677
