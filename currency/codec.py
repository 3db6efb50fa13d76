"""
currency/codec.py

Conversion between euro display strings and numeric amounts.

Display convention
------------------
``€`` glyph, a non-breaking space, dot thousands separator, comma decimal
separator and exactly two decimals::

    1250.5  ->  "€\u00a01.250,50"

``parse_currency(format_currency(a)) == a`` holds for every amount with at
most two decimal digits.
"""

from __future__ import annotations

import math
import re
from typing import Any

CURRENCY_GLYPH = "€"
NBSP = "\u00a0"

_WHITESPACE_RE = re.compile(r"\s+")


def parse_currency(display: Any) -> float:
    """
    Parse a European-format currency string into a float.

    Steps: drop the glyph and all whitespace; when a comma is present,
    remove every dot (thousands separators) and turn the comma into the
    decimal point.  Returns ``0.0`` for empty or unparseable input.
    """
    if display is None or isinstance(display, bool):
        return 0.0
    if isinstance(display, (int, float)):
        return float(display) if math.isfinite(display) else 0.0
    if not isinstance(display, str):
        return 0.0

    cleaned = _WHITESPACE_RE.sub("", display.replace(CURRENCY_GLYPH, ""))
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    if not cleaned:
        return 0.0

    try:
        amount = float(cleaned)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def format_currency(amount: float) -> str:
    """Render *amount* as ``"€\u00a0#.###,##"``."""
    number = float(amount) if math.isfinite(amount) else 0.0
    sign = "-" if number < 0 and round(abs(number), 2) != 0 else ""
    # "1,234.56" -> "1.234,56"
    body = f"{abs(number):,.2f}".replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    return f"{CURRENCY_GLYPH}{NBSP}{sign}{body}"
