from __future__ import annotations

import re

_ORDINAL_WORDS = {
    "first": "First",
    "second": "Second",
    "third": "Third",
    "fourth": "Fourth",
    "fifth": "Fifth",
    "sixth": "Sixth",
    "seventh": "Seventh",
    "eighth": "Eighth",
    "ninth": "Ninth",
    "tenth": "Tenth",
    "special": "Special",
}
_ORDINALS_BY_NUMBER = [
    "",
    "First",
    "Second",
    "Third",
    "Fourth",
    "Fifth",
    "Sixth",
    "Seventh",
    "Eighth",
    "Ninth",
    "Tenth",
]
_LEADING_INT = re.compile(r"^[+-]?\d+")


def convert_service_visit_to_text(value: object) -> str:
    """Render a service-visit number or word as an ordinal label.

    ``2`` -> ``"Second"``, ``"third"`` -> ``"Third"``, ``14`` -> ``"14th"``;
    other text is returned with its first letter capitalised.
    """
    if not value:
        return ""
    text = str(value).strip()
    known = _ORDINAL_WORDS.get(text.lower())
    if known:
        return known
    match = _LEADING_INT.match(text)
    if match:
        num = int(match.group())
        if 1 <= num < len(_ORDINALS_BY_NUMBER):
            return _ORDINALS_BY_NUMBER[num]
        return f"{num}th"
    return text[:1].upper() + text[1:]


def normalize_yes_no(value: str | None) -> str:
    """Map yes/no answers to ``Yes``/``No``; leave other codes untouched."""
    if not value:
        return ""
    lowered = value.strip().lower()
    if lowered == "yes":
        return "Yes"
    if lowered == "no":
        return "No"
    return value
