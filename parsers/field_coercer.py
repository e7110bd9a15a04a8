"""
Field coercer: raw cell values → typed ListRow fields.

Every function here is total. Bad input degrades to an empty value or a
fallback label, never to an exception.
"""

import math
import numbers
from datetime import date, datetime
from typing import Any

from models.list_row import Quantity
from utils.text_utils import format_number, is_missing, to_text

# Fallback names. Tabular and AI imports use different labels; both are
# shown to Arabic-speaking operators as-is.
TABULAR_UNKNOWN_NAME = "منتج غير معروف"  # "unknown product"
AI_UNKNOWN_NAME = "غير معروف"            # "unknown"

DEFAULT_PRICE = "0"


def coerce_code(value: Any) -> str:
    """Stringified, trimmed product code; "" when missing."""
    return to_text(value)


def coerce_name(value: Any, fallback: str = "") -> str:
    """
    Stringified product name.

    Args:
        value: Raw name cell
        fallback: Label used when the name is empty

    Returns:
        Trimmed name, or `fallback`
    """
    return to_text(value) or fallback


def coerce_qty(value: Any) -> Quantity:
    """
    Numeric quantity, or "" when unset.

    Non-numeric text, booleans, NaN/inf and zero all mean "unset" so the
    grid shows an empty input instead of a misleading 0.

    - "5"    → 5
    - 2.50   → 2.5
    - "abc"  → ""
    - 0      → ""
    """
    if isinstance(value, bool) or is_missing(value):
        return ""

    if isinstance(value, numbers.Real):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return ""

    if math.isnan(number) or math.isinf(number) or number == 0:
        return ""

    return int(number) if number.is_integer() else number


def coerce_expiry_date(value: Any) -> str:
    """
    Calendar date string (YYYY-MM-DD), or "".

    Datetime cells are reduced to their date. Text keeps only what comes
    before the first "T", dropping any time of day:
    "2025-12-31T00:00:00.000Z" → "2025-12-31".
    """
    if is_missing(value):
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return to_text(value).split("T", 1)[0].strip()


def coerce_price(value: Any) -> str:
    """Price as text; "0" when missing or zero."""
    if isinstance(value, bool) or is_missing(value):
        return DEFAULT_PRICE
    if isinstance(value, numbers.Real):
        return format_number(float(value)) if value else DEFAULT_PRICE
    return to_text(value) or DEFAULT_PRICE


def coerce_unit_label(value: Any) -> str:
    """Raw unit text used only for unit lookup."""
    return to_text(value)
