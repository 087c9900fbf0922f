"""
Value Transformers

Locale-invariant number parsing and text cleanup for scraped cells and
JSON fields. Malformed input degrades to None; nothing here raises.
"""

import html
import math
from typing import Any, Optional


def clean_text(text: Optional[str]) -> str:
    """
    Decode HTML entities, collapse whitespace runs and trim.

    Examples:
        >>> clean_text("  St.&nbsp;Louis \\n Cardinals ")
        'St. Louis Cardinals'
        >>> clean_text(None)
        ''
    """
    if not text:
        return ""
    return " ".join(html.unescape(text).split())


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a numeric cell or JSON value.

    Percent signs and thousands separators are stripped and the decimal
    point is always ".". Returns None for blanks, dashes, non-numeric text
    and non-finite results.

    Examples:
        >>> parse_number("1,234.5")
        1234.5
        >>> parse_number("52.3%")
        52.3
        >>> parse_number("--") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = clean_text(str(value)).replace("%", "").replace(",", "").strip()
    # float() also accepts "1_000", "nan" and "inf"
    if not text or "_" in text:
        return None

    try:
        number = float(text)
    except ValueError:
        return None

    return number if math.isfinite(number) else None


def parse_int(value: Any) -> Optional[int]:
    """parse_number() restricted to whole numbers."""
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)
