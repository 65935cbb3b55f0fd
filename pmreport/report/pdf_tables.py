"""Row and section renderers: the building blocks of the report grid."""

from __future__ import annotations

from collections.abc import Sequence

from .pdf_layout import (
    CELL_PAD,
    SECTION_ITEM_WIDTHS,
    SECTION_ROW_H,
    SECTION_TITLE_W,
    TEXT_SIZE,
    row_text_y,
)
from .pdf_primitives import FontHandle, PageHandle, draw_rect, draw_text

SectionItem = tuple[str, str, str]


def draw_row(
    page: PageHandle,
    bold: FontHandle,
    regular: FontHandle,
    x: float,
    y_top: float,
    cells: Sequence[str | None],
    widths: Sequence[float],
    row_h: float,
) -> None:
    """Draw one row of bordered cells whose top edge is *y_top*.

    Even columns use *bold*, odd columns *regular*.  The caller advances
    its own cursor by *row_h*.
    """
    if len(cells) != len(widths):
        raise ValueError(f"{len(cells)} cells for {len(widths)} column widths")
    cx = x
    text_y = row_text_y(y_top, row_h)
    for idx, (cell, width) in enumerate(zip(cells, widths, strict=True)):
        draw_rect(page, cx, y_top - row_h, width, row_h)
        draw_text(
            page,
            cell or "",
            cx + CELL_PAD,
            text_y,
            size=TEXT_SIZE,
            font=bold if idx % 2 == 0 else regular,
            max_width=width - 2 * CELL_PAD,
        )
        cx += width


def draw_section(
    page: PageHandle,
    bold: FontHandle,
    regular: FontHandle,
    x: float,
    y_top: float,
    title: str,
    items: Sequence[SectionItem],
) -> float:
    """Draw a titled checklist block and return the y below it.

    The title cell spans all item rows.  An empty *items* list still draws
    one blank row so every section keeps its title box.
    """
    rows: Sequence[SectionItem] = items or [("", "", "")]
    block_h = SECTION_ROW_H * len(rows)

    draw_rect(page, x, y_top - block_h, SECTION_TITLE_W, block_h)
    draw_text(
        page,
        title,
        x + 5,
        y_top - 10,
        size=TEXT_SIZE,
        font=bold,
        max_width=SECTION_TITLE_W - 2 * CELL_PAD,
    )

    for idx, item in enumerate(rows):
        row_top = y_top - idx * SECTION_ROW_H
        cx = x + SECTION_TITLE_W
        values = (tuple(item) + ("", "", ""))[:3]
        for value, width in zip(values, SECTION_ITEM_WIDTHS, strict=True):
            draw_rect(page, cx, row_top - SECTION_ROW_H, width, SECTION_ROW_H)
            draw_text(
                page,
                value or "",
                cx + 5,
                row_top - 10,
                size=TEXT_SIZE,
                font=regular,
                max_width=width - 2 * CELL_PAD - 2,
            )
            cx += width

    return y_top - block_h
