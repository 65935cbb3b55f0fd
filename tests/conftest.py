"""Shared test helpers for the pmreport test suite."""

from __future__ import annotations

from io import BytesIO

import pytest

from pmreport.report.report_data import ReportRecord
from pmreport.report.sample_data import mock_report_record

# ---------------------------------------------------------------------------
# PDF helpers
# ---------------------------------------------------------------------------


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF byte string using pypdf."""
    from pypdf import PdfReader

    reader = PdfReader(BytesIO(pdf_bytes))
    return "\n".join((page.extract_text() or "") for page in reader.pages)


def pdf_page_count(pdf_bytes: bytes) -> int:
    from pypdf import PdfReader

    return len(PdfReader(BytesIO(pdf_bytes)).pages)


def assert_pdf_contains(pdf_bytes: bytes, text: str) -> None:
    # Content streams are written uncompressed, so drawn strings are greppable.
    assert text.encode("latin-1", errors="ignore") in pdf_bytes


def png_bytes(width: int = 120, height: int = 40) -> bytes:
    from PIL import Image

    buf = BytesIO()
    Image.new("RGB", (width, height), (40, 120, 200)).save(buf, format="PNG")
    return buf.getvalue()


class StaticAssetLoader:
    """Asset loader backed by a dict; unknown refs are unavailable."""

    def __init__(self, assets: dict[str, bytes]) -> None:
        self.assets = assets
        self.requested: list[str] = []

    def load(self, ref: str) -> bytes | None:
        self.requested.append(ref)
        return self.assets.get(ref)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_record() -> ReportRecord:
    return mock_report_record()


@pytest.fixture
def blank_record() -> ReportRecord:
    return ReportRecord()
