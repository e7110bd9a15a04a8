"""
Text utilities for raw cell values.

Spreadsheet cells arrive as str, int, float (including NaN for empty
cells), datetime or None. These helpers turn them into clean text.
"""

import math
from typing import Any


def is_missing(value: Any) -> bool:
    """
    True for values that mean "no data".

    None, NaN and whitespace-only strings are missing. Zero is not.
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def format_number(value: float) -> str:
    """
    Render a number the way a spreadsheet shows it.

    - 12.0 → "12"
    - 12.5 → "12.5"
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_text(value: Any) -> str:
    """
    Stringify a raw cell value.

    Missing values become "". Whole floats lose their ".0" so a code
    typed as 1001 in Excel stays "1001".

    Args:
        value: Raw cell value

    Returns:
        Text without surrounding whitespace
    """
    if is_missing(value):
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value).strip()
