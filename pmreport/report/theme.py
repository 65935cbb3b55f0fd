from __future__ import annotations

# RGB float triples, as passed to Canvas.setFillColorRGB / setStrokeColorRGB.
REPORT_COLORS: dict[str, tuple[float, float, float]] = {
    "ink": (0.0, 0.0, 0.0),
    "border": (0.0, 0.0, 0.0),
    "brand": (0.2, 0.6, 0.8),
    "contact_fill": (0.95, 0.95, 0.95),
    "link": (0.1, 0.3, 0.7),
}
