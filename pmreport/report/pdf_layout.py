"""Layout constants and text-fitting helpers for the maintenance report.

Every row of the document is drawn from one of the width tuples below;
``ROW_TABLES`` pairs each tuple with the table width it must fill so the
grid stays aligned when a column is resized.
"""

from __future__ import annotations

from reportlab.lib.utils import simpleSplit

from .pdf_primitives import PAGE_H, PAGE_W, FontHandle, truncate_to_width

# ---------------------------------------------------------------------------
# Page geometry
# ---------------------------------------------------------------------------

MARGIN_X = 40
TOP_OFFSET = 50
PAGE_TOP_Y = PAGE_H - TOP_OFFSET
BOTTOM_MARGIN = 40

# Page 1 runs to the header bar's right edge (595 - 60); page 2 is
# symmetric (595 - 2 * 40).
PAGE1_CONTENT_W = PAGE_W - 60
PAGE2_CONTENT_W = PAGE_W - 2 * MARGIN_X

ROW_H = 20
SECTION_ROW_H = 15
LIST_ROW_H = 16
TALL_ROW_H = 40

TEXT_SIZE = 8
CELL_PAD = 3

# ---------------------------------------------------------------------------
# Page 1
# ---------------------------------------------------------------------------

HEADER_BAR_H = 30
HEADER_BAR_W = PAGE1_CONTENT_W
COMPANY_LOGO_X = 50
COMPANY_LOGO_SCALE = 0.016
PARTNER_LOGO_X = 500
PARTNER_LOGO_SCALE = 0.2
# The partner fallback sits at the page's bottom-right, not in the bar.
PARTNER_FALLBACK_POS = (450, 10)
TITLE_X = 220
HEADER_ADVANCE = 35

CONTACT_BOX_H = 50

CINEMA_ROW_WIDTHS = (100, 150, 80, 205)
ADDRESS_ROW_WIDTHS = (100, 435)
SCREEN_ROW_WIDTHS = (100, 150, 120, 165)
PROJECTOR_ROW_WIDTHS = (80, 80, 70, 70, 60, 90, 85)

SECTION_TITLE_W = 120
SECTION_LABEL_W = 235
SECTION_STATUS_W = 100
SECTION_YES_NO_W = 80
SECTION_HEADER_WIDTHS = (SECTION_TITLE_W, SECTION_LABEL_W, SECTION_STATUS_W, SECTION_YES_NO_W)
SECTION_ITEM_WIDTHS = SECTION_HEADER_WIDTHS[1:]

ENVIRONMENT_ROW_WIDTHS = (200, 335)
ENVIRONMENT_MAX_LINES = 3
ENVIRONMENT_LEADING = 10

# ---------------------------------------------------------------------------
# Page 2
# ---------------------------------------------------------------------------

LAMP_MAKE_ROW_WIDTHS = (150, 365)
LAMP_HOURS_ROW_WIDTHS = (150, 150, 150, 65)
VOLTAGE_ROW_WIDTHS = (150, 122, 122, 121)
FL_ROW_WIDTHS = (150, 150, 215)
CONTENT_PLAYER_ROW_WIDTHS = (150, 150, 95, 120)
LE_STATUS_ROW_WIDTHS = (150, 365)
REMARKS_ROW_WIDTHS = (80, 285, 80, 70)
REMARKS_MIN_H = 40
REMARKS_LEADING = 12
MAX_REMARK_LINES = 8

LEFT_COL_X = MARGIN_X
LEFT_COL_W = 240
RIGHT_COL_X = 300
RIGHT_COL_W = 255

SOFTWARE_ROW_WIDTHS = (80, 160)
SCREEN_TABLE_WIDTHS = (60, 60, 60, 60)
SCREEN_KV_WIDTHS = (120, 120)
IMAGE_EVAL_WIDTHS = (180, 60)
COLOR_TABLE_WIDTHS = (120, 45, 45, 45)
PARTS_WIDTHS = (180, 75)
AIR_POLLUTION_WIDTHS = (102, 59, 59, 59, 59, 59, 59, 59)

CAPTION_SIZE = 10
BLOCK_GAP = 20
SOFTWARE_GAP = 25
CAPTION_ADVANCE = 10

SIGNATURE_LABEL_Y = 30
SIGNATURE_IMAGE_Y = 50
SIGNATURE_MAX_W = 120
SIGNATURE_MAX_H = 50
SIGNATURE_SCALE = 0.25
CLIENT_SIGNATURE_X = 60
ENGINEER_SIGNATURE_X = PAGE_W - 180
IMAGES_LINK_Y = SIGNATURE_IMAGE_Y + SIGNATURE_MAX_H + 8

AIR_TABLE_H = 2 * ROW_H
AIR_TABLE_GAP = 20
AIR_TABLE_FLOOR_Y = IMAGES_LINK_Y + 10
# Lowest y a recommended-parts row may reach on page 2.
PARTS_FLOOR_Y = AIR_TABLE_FLOOR_Y + AIR_TABLE_H + AIR_TABLE_GAP

PART_SPLIT_AT = 30

ROW_TABLES: dict[str, tuple[tuple[int, ...], int]] = {
    "cinema": (CINEMA_ROW_WIDTHS, PAGE1_CONTENT_W),
    "address": (ADDRESS_ROW_WIDTHS, PAGE1_CONTENT_W),
    "screen": (SCREEN_ROW_WIDTHS, PAGE1_CONTENT_W),
    "projector": (PROJECTOR_ROW_WIDTHS, PAGE1_CONTENT_W),
    "section_header": (SECTION_HEADER_WIDTHS, PAGE1_CONTENT_W),
    "environment": (ENVIRONMENT_ROW_WIDTHS, PAGE1_CONTENT_W),
    "lamp_make": (LAMP_MAKE_ROW_WIDTHS, PAGE2_CONTENT_W),
    "lamp_hours": (LAMP_HOURS_ROW_WIDTHS, PAGE2_CONTENT_W),
    "voltage": (VOLTAGE_ROW_WIDTHS, PAGE2_CONTENT_W),
    "fl": (FL_ROW_WIDTHS, PAGE2_CONTENT_W),
    "content_player": (CONTENT_PLAYER_ROW_WIDTHS, PAGE2_CONTENT_W),
    "le_status": (LE_STATUS_ROW_WIDTHS, PAGE2_CONTENT_W),
    "remarks": (REMARKS_ROW_WIDTHS, PAGE2_CONTENT_W),
    "software": (SOFTWARE_ROW_WIDTHS, LEFT_COL_W),
    "screen_table": (SCREEN_TABLE_WIDTHS, LEFT_COL_W),
    "screen_kv": (SCREEN_KV_WIDTHS, LEFT_COL_W),
    "image_eval": (IMAGE_EVAL_WIDTHS, LEFT_COL_W),
    "color_table": (COLOR_TABLE_WIDTHS, RIGHT_COL_W),
    "parts": (PARTS_WIDTHS, RIGHT_COL_W),
    "air_pollution": (AIR_POLLUTION_WIDTHS, PAGE2_CONTENT_W),
}


# ---------------------------------------------------------------------------
# Text fitting
# ---------------------------------------------------------------------------


def split_part_description(description: str) -> list[str]:
    """Split a part description into one or two table lines at 30 chars."""
    if len(description) <= PART_SPLIT_AT:
        return [description]
    return [description[:PART_SPLIT_AT], description[PART_SPLIT_AT:]]


def wrap_text(
    text: str,
    font: FontHandle,
    size: float,
    max_width: float,
    *,
    max_lines: int | None = None,
) -> list[str]:
    """Word-wrap *text* to *max_width*; overflow ends in an ellipsis."""
    lines: list[str] = []
    for paragraph in (text or "").split("\n"):
        lines.extend(simpleSplit(paragraph, font.name, size, max_width) or [""])
    if not lines:
        lines = [""]
    if max_lines is not None and len(lines) > max_lines:
        lines = lines[:max_lines]
        last = truncate_to_width(lines[-1], font, size, max_width - font.width("…", size))
        lines[-1] = last.rstrip() + "…"
    return lines


def row_text_y(y_top: float, height: float) -> float:
    """Baseline that vertically centres 8pt text in a row."""
    return y_top - height + height / 2 - 3
