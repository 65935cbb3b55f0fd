"""PDF report builder – Canvas-based EW preventive-maintenance report.

Page 1: header band, contact block, site/projector rows and the eight
         checklist sections.
Page 2: lamp/voltage/fL rows, remarks, then two independent columns
         (screen info + image evaluation on the left, MCGD / CIE XYZ /
         recommended parts on the right), the air-pollution table and the
         signature footer.

Recommended parts that do not fit above the footer continue on extra
pages.  Every layout helper takes a cursor and returns the cursor below
what it drew.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import FontEmbedError, ReportRenderError
from .assets import ReportAssets
from .formatting import convert_service_visit_to_text, normalize_yes_no
from .pdf_layout import (
    ADDRESS_ROW_WIDTHS,
    AIR_POLLUTION_WIDTHS,
    AIR_TABLE_GAP,
    BLOCK_GAP,
    BOTTOM_MARGIN,
    CAPTION_ADVANCE,
    CAPTION_SIZE,
    CELL_PAD,
    CINEMA_ROW_WIDTHS,
    CLIENT_SIGNATURE_X,
    COLOR_TABLE_WIDTHS,
    COMPANY_LOGO_SCALE,
    COMPANY_LOGO_X,
    CONTACT_BOX_H,
    CONTENT_PLAYER_ROW_WIDTHS,
    ENGINEER_SIGNATURE_X,
    ENVIRONMENT_LEADING,
    ENVIRONMENT_MAX_LINES,
    ENVIRONMENT_ROW_WIDTHS,
    FL_ROW_WIDTHS,
    HEADER_ADVANCE,
    HEADER_BAR_H,
    HEADER_BAR_W,
    IMAGE_EVAL_WIDTHS,
    IMAGES_LINK_Y,
    LAMP_HOURS_ROW_WIDTHS,
    LAMP_MAKE_ROW_WIDTHS,
    LE_STATUS_ROW_WIDTHS,
    LEFT_COL_X,
    LIST_ROW_H,
    MARGIN_X,
    MAX_REMARK_LINES,
    PAGE2_CONTENT_W,
    PAGE_TOP_Y,
    PARTNER_FALLBACK_POS,
    PARTNER_LOGO_SCALE,
    PARTNER_LOGO_X,
    PARTS_FLOOR_Y,
    PARTS_WIDTHS,
    PROJECTOR_ROW_WIDTHS,
    REMARKS_LEADING,
    REMARKS_MIN_H,
    REMARKS_ROW_WIDTHS,
    RIGHT_COL_X,
    ROW_H,
    SCREEN_KV_WIDTHS,
    SCREEN_ROW_WIDTHS,
    SCREEN_TABLE_WIDTHS,
    SECTION_HEADER_WIDTHS,
    SIGNATURE_IMAGE_Y,
    SIGNATURE_LABEL_Y,
    SIGNATURE_MAX_H,
    SIGNATURE_MAX_W,
    SIGNATURE_SCALE,
    SOFTWARE_GAP,
    SOFTWARE_ROW_WIDTHS,
    TALL_ROW_H,
    TEXT_SIZE,
    TITLE_X,
    VOLTAGE_ROW_WIDTHS,
    split_part_description,
    wrap_text,
)
from .pdf_primitives import (
    EmbeddedImage,
    FontHandle,
    PageHandle,
    PdfDocument,
    draw_image,
    draw_rect,
    draw_text,
    link_url,
)
from .pdf_tables import SectionItem, draw_row, draw_section
from .report_data import ColorReading, ReportRecord, ScreenDims, StatusItem
from .theme import REPORT_COLORS

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Fixed document text
# ---------------------------------------------------------------------------

COMPANY_NAME = "ASCOMP INC."
REPORT_TITLE = "EW - Preventive Maintenance Report"

CONTACT_ADDRESS = "9, Community Centre, 2nd Floor, Phase I, Mayapuri, New Delhi, Delhi 110064"
CONTACT_LANDLINE = "011-45501226"
CONTACT_MOBILE = "8882475207"
CONTACT_EMAIL = "helpdesk@ascompinc.in"

PARTS_CAPTION = "Recommended Parts"
PARTS_CONTINUED_CAPTION = "Recommended Parts (continued)"

IMAGE_EVALUATION_LABELS = (
    "Focus/boresite",
    "Integrator Position",
    "Any Spot on the Screen after PPM",
    "Check Screen Cropping - FLAT and SCOPE",
    "Convergence Checked",
    "Channels Checked - Scope, Flat, Alternative",
    "Pixel defects",
    "Excessive image vibration",
    "LiteLOC",
)

MCGD_LABELS = ("W2K", "W4K", "R2K", "R4K", "G2K", "G4K", "B2K", "B4K")

AIR_POLLUTION_HEADER = (
    "Air Pollution Level",
    "HCHO",
    "TVOC",
    "PM1.0",
    "PM2.5",
    "PM10",
    "Temperature C",
    "Humidity %",
)

BRAND = REPORT_COLORS["brand"]
CONTACT_FILL = REPORT_COLORS["contact_fill"]
LINK = REPORT_COLORS["link"]


@dataclass(frozen=True)
class FontSpec:
    """Font families for the two weights; built-in names or ``.ttf`` paths."""

    regular: str = "Times-Roman"
    bold: str = "Times-Bold"


@dataclass
class RenderStats:
    page_count: int = 0
    page1_final_y: float = 0.0
    left_y: float = 0.0
    right_y: float = 0.0
    air_table_top: float = 0.0
    parts_rows: int = 0
    continuation_pages: int = 0
    fallbacks: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RenderedReport:
    pdf: bytes
    stats: RenderStats


@dataclass(frozen=True)
class _Fonts:
    bold: FontHandle
    regular: FontHandle


@dataclass(frozen=True)
class _Images:
    company_logo: EmbeddedImage | None = None
    partner_logo: EmbeddedImage | None = None
    engineer_signature: EmbeddedImage | None = None
    site_signature: EmbeddedImage | None = None


# ---------------------------------------------------------------------------
# Section content
# ---------------------------------------------------------------------------


def _items(labels: Sequence[str], values: Sequence[StatusItem]) -> list[SectionItem]:
    return [(label, v.status, v.yes_no) for label, v in zip(labels, values, strict=True)]


def page1_sections(record: ReportRecord) -> list[tuple[str, list[SectionItem]]]:
    """Checklist sections of page 1 in reading order."""
    return [
        (
            "OPTICALS",
            _items(
                ("Reflector", "UV filter", "Integrator Rod", "Cold Mirror", "Fold Mirror"),
                record.opticals.items(),
            ),
        ),
        (
            "ELECTRONICS",
            _items(
                (
                    "Touch Panel",
                    "EVB Board",
                    "IMCB Board",
                    "PIB Board",
                    "ICP Board",
                    "IMB/S Board",
                ),
                record.electronics.items(),
            ),
        ),
        (
            "Serial Number verified",
            _items(("Chassis label vs Touch Panel",), (record.serial_verified,)),
        ),
        (
            "Disposable Consumables",
            _items(("Air Intake, LAD and RAD",), (record.disposable_consumables,)),
        ),
        ("Coolant", _items(("Level and Color",), (record.coolant,))),
        (
            "Light Engine Test Pattern",
            _items(("White", "Red", "Green", "Blue", "Black"), record.light_engine_test.items()),
        ),
        (
            "MECHANICAL",
            _items(
                (
                    "AC blower and Vane Switch",
                    "Extractor Vane Switch",
                    "Exhaust CFM - Value",
                    "Light Engine 4 fans with LAD fan",
                    "Card Cage Top and Bottom fans",
                    "Radiator fan and Pump",
                    "Connector and hose for the Pump",
                    "Security and lamp house lock switch",
                ),
                record.mechanical.items(),
            ),
        ),
        ("Lamp LOC Mechanism X,", _items(("Y and Z movement",), (record.lamp_loc,))),
    ]


def part_rows(record: ReportRecord) -> list[list[tuple[str, str]]]:
    """Recommended-parts table body grouped per part.

    Each group is one or two ``(text, part_number)`` rows; only the first
    row of a group carries the part number.
    """
    if not record.recommended_parts:
        return [[("None", "-")]]
    groups: list[list[tuple[str, str]]] = []
    for part in record.recommended_parts:
        lines = split_part_description(part.description or "")
        group = [(lines[0], part.part_number or "")]
        group.extend((line, "") for line in lines[1:])
        groups.append(group)
    return groups


def le_status_text(item: StatusItem) -> str:
    status = item.status or ""
    if item.note:
        return f"{status} - {item.note}" if status else item.note
    return status


# ---------------------------------------------------------------------------
# Page 1
# ---------------------------------------------------------------------------


def _draw_header_band(
    page: PageHandle, fonts: _Fonts, images: _Images, y: float, stats: RenderStats
) -> float:
    draw_rect(page, MARGIN_X, y - HEADER_BAR_H, HEADER_BAR_W, HEADER_BAR_H, border_width=1)
    mid_y = y - HEADER_BAR_H / 2

    if images.company_logo is not None:
        w, h = images.company_logo.scale(COMPANY_LOGO_SCALE)
        draw_image(page, images.company_logo, COMPANY_LOGO_X, mid_y - h / 2, w, h)
    else:
        stats.fallbacks.append("company_logo")
        draw_text(page, COMPANY_NAME, COMPANY_LOGO_X, y - 20, size=16, font=fonts.bold, color=BRAND)

    if images.partner_logo is not None:
        w, h = images.partner_logo.scale(PARTNER_LOGO_SCALE)
        draw_image(page, images.partner_logo, PARTNER_LOGO_X, mid_y - h / 2, w, h)
    else:
        stats.fallbacks.append("partner_logo")
        fx, fy = PARTNER_FALLBACK_POS
        draw_text(page, COMPANY_NAME, fx, fy, size=16, font=fonts.bold, color=BRAND)

    draw_text(page, REPORT_TITLE, TITLE_X, y - 20, size=14, font=fonts.bold)
    return y - HEADER_ADVANCE


def _draw_contact_block(page: PageHandle, fonts: _Fonts, y: float) -> float:
    draw_rect(
        page,
        MARGIN_X,
        y - CONTACT_BOX_H,
        HEADER_BAR_W,
        CONTACT_BOX_H,
        border_width=1,
        fill_color=CONTACT_FILL,
    )
    draw_text(page, "Contact Details", 50, y - 12, size=10, font=fonts.bold, color=BRAND)

    def label(text: str, x: float, row_y: float) -> None:
        draw_text(page, text, x, row_y, size=9, font=fonts.bold)

    def value(text: str, x: float, row_y: float, max_width: float) -> None:
        draw_text(page, text, x, row_y, size=8, font=fonts.regular, max_width=max_width)

    label("Address:", 50, y - 28)
    value(CONTACT_ADDRESS, 120, y - 28, HEADER_BAR_W - 90)
    label("Landline:", 50, y - 40)
    value(CONTACT_LANDLINE, 120, y - 40, 115)
    label("Mobile:", 240, y - 40)
    value(CONTACT_MOBILE, 300, y - 40, 95)
    label("Email:", 400, y - 40)
    value(CONTACT_EMAIL, 450, y - 40, 120)
    return y - CONTACT_BOX_H


def _draw_identity_rows(page: PageHandle, fonts: _Fonts, record: ReportRecord, y: float) -> float:
    rows: list[tuple[list[str], Sequence[float]]] = [
        (["CINEMA NAME:", record.cinema_name, "DATE:", record.date], CINEMA_ROW_WIDTHS),
        (["Address:", record.address], ADDRESS_ROW_WIDTHS),
        (
            ["Contact Details", record.contact_details, "LOCATION:", record.location],
            CINEMA_ROW_WIDTHS,
        ),
        (
            [
                "SCREEN No:",
                record.screen_no,
                "Engg and EW Service visit:",
                convert_service_visit_to_text(record.service_visit),
            ],
            SCREEN_ROW_WIDTHS,
        ),
        (
            [
                "Projector Model:",
                record.projector_model,
                "Serial No.:",
                record.serial_no,
                "Running Hours:",
                record.running_hours,
                "Replacement Required",
            ],
            PROJECTOR_ROW_WIDTHS,
        ),
    ]
    for cells, widths in rows:
        draw_row(page, fonts.bold, fonts.regular, MARGIN_X, y, cells, widths, ROW_H)
        y -= ROW_H

    draw_row(
        page,
        fonts.bold,
        fonts.bold,
        MARGIN_X,
        y,
        ["SECTIONS", "DESCRIPTION", "STATUS", "YES/NO - OK"],
        SECTION_HEADER_WIDTHS,
        ROW_H,
    )
    return y - ROW_H


def _draw_environment(page: PageHandle, fonts: _Fonts, text: str, y: float) -> float:
    label_w, text_w = ENVIRONMENT_ROW_WIDTHS
    draw_row(
        page,
        fonts.bold,
        fonts.regular,
        MARGIN_X,
        y,
        ["Projector placement, room and environment:", ""],
        ENVIRONMENT_ROW_WIDTHS,
        TALL_ROW_H,
    )
    lines = wrap_text(
        text,
        fonts.regular,
        TEXT_SIZE,
        text_w - 2 * CELL_PAD,
        max_lines=ENVIRONMENT_MAX_LINES,
    )
    line_y = y - 12
    text_x = MARGIN_X + label_w + CELL_PAD
    for line in lines:
        draw_text(page, line, text_x, line_y, size=TEXT_SIZE, font=fonts.regular)
        line_y -= ENVIRONMENT_LEADING
    return y - TALL_ROW_H


def _draw_page1(
    page: PageHandle, fonts: _Fonts, images: _Images, record: ReportRecord, stats: RenderStats
) -> float:
    y = _draw_header_band(page, fonts, images, PAGE_TOP_Y, stats)
    y = _draw_contact_block(page, fonts, y)
    y = _draw_identity_rows(page, fonts, record, y)
    for title, items in page1_sections(record):
        y = draw_section(page, fonts.bold, fonts.regular, MARGIN_X, y, title, items)
    if record.projector_environment:
        y = _draw_environment(page, fonts, record.projector_environment, y)
    return y


# ---------------------------------------------------------------------------
# Page 2: full-width rows
# ---------------------------------------------------------------------------


def _draw_page2_rows(page: PageHandle, fonts: _Fonts, record: ReportRecord, y: float) -> float:
    b, r = fonts.bold, fonts.regular
    v = record.voltage_params

    def row(
        cells: list[str], widths: Sequence[float], even: FontHandle = b, odd: FontHandle = r
    ) -> None:
        nonlocal y
        draw_row(page, even, odd, MARGIN_X, y, cells, widths, ROW_H)
        y -= ROW_H

    row(["Lamp Make and Model:", record.lamp_make], LAMP_MAKE_ROW_WIDTHS)
    row(
        [
            "Number of hours running:",
            record.lamp_hours,
            "Current lamp running hours:",
            record.current_lamp_hours,
        ],
        LAMP_HOURS_ROW_WIDTHS,
    )
    row(["Voltage parameters", "P vs N", "P vs E", "N vs E"], VOLTAGE_ROW_WIDTHS, b, b)
    row(["", v.pvn, v.pve, v.nve], VOLTAGE_ROW_WIDTHS, r, r)
    row(["fL measurements:", "Before", "After"], FL_ROW_WIDTHS)
    row(["", record.fl_before, record.fl_after], FL_ROW_WIDTHS)
    row(
        ["Content Player Model:", record.content_player, "AC Status:", record.ac_status],
        CONTENT_PLAYER_ROW_WIDTHS,
    )
    row(["LE Status during PM:", le_status_text(record.le_status)], LE_STATUS_ROW_WIDTHS)
    return _draw_remarks(page, fonts, record, y)


def _draw_remarks(page: PageHandle, fonts: _Fonts, record: ReportRecord, y: float) -> float:
    label_w, text_w = REMARKS_ROW_WIDTHS[0], REMARKS_ROW_WIDTHS[1]
    lines = (
        wrap_text(
            record.remarks,
            fonts.regular,
            TEXT_SIZE,
            text_w - 2 * CELL_PAD,
            max_lines=MAX_REMARK_LINES,
        )
        if record.remarks
        else []
    )
    row_h = max(REMARKS_MIN_H, len(lines) * REMARKS_LEADING + 8)
    draw_row(
        page,
        fonts.bold,
        fonts.regular,
        MARGIN_X,
        y,
        ["Remarks:", "", "LE S. No.:", record.le_serial_no],
        REMARKS_ROW_WIDTHS,
        row_h,
    )
    text_x = MARGIN_X + label_w + CELL_PAD
    for idx, line in enumerate(lines):
        line_y = y - REMARKS_LEADING * (idx + 1)
        draw_text(page, line, text_x, line_y, size=TEXT_SIZE, font=fonts.regular)
    return y - row_h


# ---------------------------------------------------------------------------
# Page 2: columns
# ---------------------------------------------------------------------------


def _draw_caption(page: PageHandle, fonts: _Fonts, text: str, x: float, y: float) -> float:
    draw_text(page, text, x, y, size=CAPTION_SIZE, font=fonts.bold)
    return y - CAPTION_ADVANCE


def _screen_cells(label: str, dims: ScreenDims) -> list[str]:
    return [label, dims.height, dims.width, dims.gain]


def _draw_left_column(page: PageHandle, fonts: _Fonts, record: ReportRecord, y: float) -> float:
    b, r = fonts.bold, fonts.regular
    x = LEFT_COL_X
    screen = record.screen_info

    software = ["Software Version", record.software_version]
    draw_row(page, b, r, x, y, software, SOFTWARE_ROW_WIDTHS, ROW_H)
    y -= ROW_H + SOFTWARE_GAP

    y = _draw_caption(page, fonts, "Screen Information in metres", x, y)
    draw_row(page, b, b, x, y, ["", "Height", "Width", "Gain"], SCREEN_TABLE_WIDTHS, ROW_H)
    y -= ROW_H
    for label, dims in (("SCOPE", screen.scope), ("FLAT", screen.flat)):
        draw_row(page, b, r, x, y, _screen_cells(label, dims), SCREEN_TABLE_WIDTHS, ROW_H)
        y -= ROW_H
    draw_row(page, b, r, x, y, ["Screen Make", screen.make], SCREEN_KV_WIDTHS, ROW_H)
    y -= ROW_H
    draw_row(page, b, r, x, y, ["Throw Distance", record.throw_distance], SCREEN_KV_WIDTHS, ROW_H)
    y -= ROW_H + BLOCK_GAP

    draw_row(page, b, b, x, y, ["Image Evaluation", "OK - Yes/No"], IMAGE_EVAL_WIDTHS, ROW_H)
    y -= ROW_H
    for label, item in zip(IMAGE_EVALUATION_LABELS, record.image_evaluation.items(), strict=True):
        cells = [label, normalize_yes_no(item.yes_no)]
        draw_row(page, r, r, x, y, cells, IMAGE_EVAL_WIDTHS, LIST_ROW_H)
        y -= LIST_ROW_H
    return y


def _color_cells(label: str, reading: ColorReading) -> list[str]:
    return [label, reading.fl, reading.x, reading.y]


def _draw_right_column(
    page: PageHandle, fonts: _Fonts, record: ReportRecord, y: float, stats: RenderStats
) -> tuple[float, list[list[tuple[str, str]]]]:
    """Draw MCGD, CIE XYZ and as many parts as fit; return leftover parts."""
    b, r = fonts.bold, fonts.regular
    x = RIGHT_COL_X
    mcgd = record.mcgd

    draw_row(page, b, b, x, y, ["MCGD", "fL", "x", "y"], COLOR_TABLE_WIDTHS, ROW_H)
    y -= ROW_H
    readings = (
        mcgd.white_2k,
        mcgd.white_4k,
        mcgd.red_2k,
        mcgd.red_4k,
        mcgd.green_2k,
        mcgd.green_4k,
        mcgd.blue_2k,
        mcgd.blue_4k,
    )
    for label, reading in zip(MCGD_LABELS, readings, strict=True):
        draw_row(page, r, r, x, y, _color_cells(label, reading), COLOR_TABLE_WIDTHS, ROW_H)
        y -= ROW_H
    y -= BLOCK_GAP

    y = _draw_caption(page, fonts, "CIE XYZ Color Accuracy", x, y)
    draw_row(page, b, r, x, y, ["Test Pattern", "x", "y", "fL"], COLOR_TABLE_WIDTHS, ROW_H)
    y -= ROW_H
    for label, reading in (
        ("BW Step-10 2K", record.cie_xyz_2k),
        ("BW Step-10 4K", record.cie_xyz_4k),
    ):
        cells = [label, reading.x, reading.y, reading.fl]
        draw_row(page, r, r, x, y, cells, COLOR_TABLE_WIDTHS, ROW_H)
        y -= ROW_H
    y -= BLOCK_GAP

    y = _draw_caption(page, fonts, PARTS_CAPTION, x, y)
    draw_row(page, b, b, x, y, ["Part Name", "Part Number"], PARTS_WIDTHS, ROW_H)
    y -= ROW_H
    return _draw_part_groups(page, fonts, x, y, part_rows(record), PARTS_FLOOR_Y, stats)


def _draw_part_groups(
    page: PageHandle,
    fonts: _Fonts,
    x: float,
    y: float,
    groups: list[list[tuple[str, str]]],
    floor_y: float,
    stats: RenderStats,
) -> tuple[float, list[list[tuple[str, str]]]]:
    """Draw whole part groups while they stay above *floor_y*."""
    for idx, group in enumerate(groups):
        if y - LIST_ROW_H * len(group) < floor_y:
            return y, groups[idx:]
        for text, part_number in group:
            draw_row(
                page,
                fonts.regular,
                fonts.regular,
                x,
                y,
                [text, part_number],
                PARTS_WIDTHS,
                LIST_ROW_H,
            )
            y -= LIST_ROW_H
            stats.parts_rows += 1
    return y, []


def _draw_air_pollution(page: PageHandle, fonts: _Fonts, record: ReportRecord, y: float) -> float:
    air = record.air_pollution
    b, r = fonts.bold, fonts.regular
    draw_row(page, b, b, MARGIN_X, y, list(AIR_POLLUTION_HEADER), AIR_POLLUTION_WIDTHS, ROW_H)
    y -= ROW_H
    values = [
        air.level,
        air.hcho,
        air.tvoc,
        air.pm1,
        air.pm25,
        air.pm10,
        air.temperature,
        air.humidity,
    ]
    draw_row(page, r, r, MARGIN_X, y, values, AIR_POLLUTION_WIDTHS, ROW_H)
    return y - ROW_H


def _draw_images_link(page: PageHandle, fonts: _Fonts, url: str) -> None:
    label = "Service Images:"
    draw_text(page, label, MARGIN_X, IMAGES_LINK_Y, size=TEXT_SIZE, font=fonts.bold)
    url_x = MARGIN_X + fonts.bold.width(label, TEXT_SIZE) + 4
    url_w = MARGIN_X + PAGE2_CONTENT_W - url_x
    draw_text(
        page,
        url,
        url_x,
        IMAGES_LINK_Y,
        size=TEXT_SIZE,
        font=fonts.regular,
        color=LINK,
        max_width=url_w,
    )
    link_url(page, url, (url_x, IMAGES_LINK_Y - 2, url_x + url_w, IMAGES_LINK_Y + TEXT_SIZE))


def _draw_signature(page: PageHandle, image: EmbeddedImage | None, x: float) -> None:
    if image is None:
        return
    w, h = image.scale(SIGNATURE_SCALE)
    draw_image(page, image, x, SIGNATURE_IMAGE_Y, min(w, SIGNATURE_MAX_W), min(h, SIGNATURE_MAX_H))


def _draw_signatures(page: PageHandle, fonts: _Fonts, images: _Images) -> None:
    for label, x in (
        ("Client's Signature & Stamp", CLIENT_SIGNATURE_X),
        ("Engineer's Signature", ENGINEER_SIGNATURE_X),
    ):
        draw_text(page, label, x, SIGNATURE_LABEL_Y, size=10, font=fonts.bold)
    _draw_signature(page, images.site_signature, CLIENT_SIGNATURE_X)
    _draw_signature(page, images.engineer_signature, ENGINEER_SIGNATURE_X)


def _draw_page2(
    page: PageHandle, fonts: _Fonts, images: _Images, record: ReportRecord, stats: RenderStats
) -> list[list[tuple[str, str]]]:
    y = _draw_page2_rows(page, fonts, record, PAGE_TOP_Y)

    left_y = _draw_left_column(page, fonts, record, y)
    right_y, leftover = _draw_right_column(page, fonts, record, y, stats)
    stats.left_y, stats.right_y = left_y, right_y

    air_top = min(left_y, right_y) - AIR_TABLE_GAP
    stats.air_table_top = air_top
    _draw_air_pollution(page, fonts, record, air_top)

    if record.images_link:
        _draw_images_link(page, fonts, record.images_link)
    _draw_signatures(page, fonts, images)
    return leftover


def _draw_continuation_pages(
    document: PdfDocument,
    fonts: _Fonts,
    groups: list[list[tuple[str, str]]],
    stats: RenderStats,
) -> None:
    while groups:
        page = document.add_page()
        stats.continuation_pages += 1
        y = _draw_caption(page, fonts, PARTS_CONTINUED_CAPTION, MARGIN_X, PAGE_TOP_Y)
        header = ["Part Name", "Part Number"]
        draw_row(page, fonts.bold, fonts.bold, MARGIN_X, y, header, PARTS_WIDTHS, ROW_H)
        y -= ROW_H
        _, groups = _draw_part_groups(page, fonts, MARGIN_X, y, groups, BOTTOM_MARGIN, stats)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def _load_images(document: PdfDocument, record: ReportRecord, assets: ReportAssets) -> _Images:
    def embed(ref: str | None, what: str) -> EmbeddedImage | None:
        image = document.embed_image(assets.load(ref))
        if image is None and ref:
            LOGGER.warning("%s unavailable (%s); using fallback", what, ref[:80])
        return image

    return _Images(
        company_logo=embed(assets.company_logo, "Company logo"),
        partner_logo=embed(assets.partner_logo, "Partner logo"),
        engineer_signature=embed(record.engineer_signature_url, "Engineer signature"),
        site_signature=embed(record.site_signature_url, "Site signature"),
    )


def compose_report(
    record: ReportRecord,
    *,
    assets: ReportAssets | None = None,
    fonts: FontSpec | None = None,
) -> RenderedReport:
    """Lay out *record* and return the PDF bytes with layout statistics.

    Fonts and images are resolved before the first page is opened.  Font
    failures raise :class:`FontEmbedError`; missing images fall back to
    text or are omitted.
    """
    assets = assets or ReportAssets()
    fonts = fonts or FontSpec()
    stats = RenderStats()

    title = REPORT_TITLE
    if record.cinema_name:
        title = f"{REPORT_TITLE} - {record.cinema_name}"
    document = PdfDocument.create(title=title, author=COMPANY_NAME)
    handles = _Fonts(
        bold=document.embed_font(fonts.bold),
        regular=document.embed_font(fonts.regular),
    )
    images = _load_images(document, record, assets)

    page1 = document.add_page()
    stats.page1_final_y = _draw_page1(page1, handles, images, record, stats)

    page2 = document.add_page()
    leftover = _draw_page2(page2, handles, images, record, stats)
    if leftover:
        LOGGER.info(
            "Recommended parts overflow page 2; %d part(s) moved to continuation pages",
            len(leftover),
        )
        _draw_continuation_pages(document, handles, leftover, stats)

    stats.page_count = document.page_count
    return RenderedReport(pdf=document.serialize(), stats=stats)


def build_report_pdf(
    record: ReportRecord,
    *,
    assets: ReportAssets | None = None,
    fonts: FontSpec | None = None,
) -> bytes:
    """Build the maintenance-report PDF for *record*."""
    try:
        return compose_report(record, assets=assets, fonts=fonts).pdf
    except FontEmbedError:
        raise
    except Exception as exc:
        LOGGER.error("PDF generation failed.", exc_info=True)
        raise ReportRenderError("PDF generation failed") from exc


def render_report_to_file(
    record: ReportRecord,
    path: Path | str,
    *,
    assets: ReportAssets | None = None,
    fonts: FontSpec | None = None,
) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(build_report_pdf(record, assets=assets, fonts=fonts))
    LOGGER.info("Wrote report for %r to %s", record.cinema_name, out)
    return out
