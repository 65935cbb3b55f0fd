"""Primitive drawing layer over the ReportLab canvas.

Coordinates are PDF points with the origin at the bottom-left of the page.
Nothing here knows about report layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from ..errors import FontEmbedError, ReportRenderError
from .theme import REPORT_COLORS

LOGGER = logging.getLogger(__name__)

PAGE_W = 595
PAGE_H = 842
PAGE_SIZE = (PAGE_W, PAGE_H)

RGB = tuple[float, float, float]
BLACK: RGB = REPORT_COLORS["ink"]

# TTF registrations are process-wide in ReportLab; registered name -> file.
_TTF_PATHS: dict[str, Path] = {}


def _ttf_font_name(path: Path) -> str:
    """Font name for *path*: its stem, suffixed when another file owns it."""
    base = name = path.stem
    n = 1
    while True:
        owner = _TTF_PATHS.get(name)
        if owner == path:
            return name
        if owner is None and name not in pdfmetrics.getRegisteredFontNames():
            return name
        n += 1
        name = f"{base}-{n}"


@dataclass(frozen=True)
class FontHandle:
    name: str

    def width(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)


@dataclass(frozen=True)
class EmbeddedImage:
    reader: ImageReader
    pixel_w: int
    pixel_h: int

    def scale(self, factor: float) -> tuple[float, float]:
        return self.pixel_w * factor, self.pixel_h * factor


@dataclass(frozen=True)
class PageHandle:
    """A page of a :class:`PdfDocument`; only the newest page is drawable."""

    document: PdfDocument
    number: int
    width: float
    height: float

    @property
    def canvas(self) -> Canvas:
        if self.number != self.document.page_count:
            raise ReportRenderError(f"page {self.number} is already closed")
        return self.document.canvas


def truncate_to_width(text: str, font: FontHandle, size: float, max_width: float) -> str:
    """Cut *text* from the right until it fits *max_width*."""
    if max_width <= 0:
        return ""
    if font.width(text, size) <= max_width:
        return text
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if font.width(text[:mid], size) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo]


class PdfDocument:
    """One render's document.  Not shared between renders."""

    def __init__(self, *, title: str = "", author: str = "") -> None:
        self._buffer = BytesIO()
        # invariant=1 drops the creation date and random file id so equal
        # input gives byte-identical output.
        self.canvas = Canvas(
            self._buffer, pagesize=PAGE_SIZE, pageCompression=0, invariant=1
        )
        if title:
            self.canvas.setTitle(title)
        if author:
            self.canvas.setAuthor(author)
        self.page_count = 0
        self._saved = False

    @classmethod
    def create(cls, *, title: str = "", author: str = "") -> PdfDocument:
        return cls(title=title, author=author)

    def add_page(self, width: float = PAGE_W, height: float = PAGE_H) -> PageHandle:
        if self.page_count:
            self.canvas.showPage()
        self.canvas.setPageSize((width, height))
        self.page_count += 1
        return PageHandle(self, self.page_count, width, height)

    def embed_font(self, family: str) -> FontHandle:
        """Resolve a built-in font name or register a TTF file path."""
        try:
            if family.lower().endswith(".ttf"):
                path = Path(family).resolve()
                name = _ttf_font_name(path)
                if name not in _TTF_PATHS:
                    pdfmetrics.registerFont(TTFont(name, str(path)))
                    _TTF_PATHS[name] = path
                return FontHandle(name)
            pdfmetrics.getFont(family)
        except Exception as exc:
            raise FontEmbedError(f"cannot embed font {family!r}: {exc}") from exc
        return FontHandle(family)

    def embed_image(self, data: bytes | None) -> EmbeddedImage | None:
        if not data:
            return None
        try:
            reader = ImageReader(BytesIO(data))
            pixel_w, pixel_h = reader.getSize()
        except Exception as exc:
            LOGGER.warning("Image could not be embedded: %s", exc)
            return None
        return EmbeddedImage(reader, int(pixel_w), int(pixel_h))

    def serialize(self) -> bytes:
        if not self._saved:
            if self.page_count:
                self.canvas.showPage()
            self.canvas.save()
            self._saved = True
        return self._buffer.getvalue()


def draw_rect(
    page: PageHandle,
    x: float,
    y: float,
    width: float,
    height: float,
    *,
    border_color: RGB = BLACK,
    border_width: float = 0.5,
    fill_color: RGB | None = None,
) -> None:
    c = page.canvas
    c.setLineWidth(border_width)
    c.setStrokeColorRGB(*border_color)
    if fill_color is not None:
        c.setFillColorRGB(*fill_color)
    c.rect(x, y, width, max(height, 0), stroke=1, fill=1 if fill_color is not None else 0)


def draw_text(
    page: PageHandle,
    text: str,
    x: float,
    y: float,
    *,
    size: float,
    font: FontHandle,
    color: RGB = BLACK,
    max_width: float | None = None,
) -> None:
    if not text:
        return
    if max_width is not None:
        text = truncate_to_width(text, font, size, max_width)
    c = page.canvas
    c.setFillColorRGB(*color)
    c.setFont(font.name, size)
    c.drawString(x, y, text)


def draw_image(
    page: PageHandle, image: EmbeddedImage, x: float, y: float, width: float, height: float
) -> None:
    page.canvas.drawImage(image.reader, x, y, width=width, height=height, mask="auto")


def link_url(page: PageHandle, url: str, rect: tuple[float, float, float, float]) -> None:
    page.canvas.linkURL(url, rect, relative=0, thickness=0)
