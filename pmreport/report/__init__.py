"""pmreport.report – renderer-only PDF modules.

This package contains **only** rendering code.  Fetching and mapping
service records lives in :mod:`pmreport.adapter`.
"""

from .assets import ReportAssets
from .pdf_builder import (
    FontSpec,
    RenderStats,
    build_report_pdf,
    compose_report,
    render_report_to_file,
)
from .report_data import ReportRecord

__all__ = [
    "FontSpec",
    "RenderStats",
    "ReportAssets",
    "ReportRecord",
    "build_report_pdf",
    "compose_report",
    "render_report_to_file",
]
