"""
Import source parsers: spreadsheet reading, header mapping, field coercion.
"""

from parsers.excel_parser import read_import_records, build_inventory_template
from parsers.header_normalizer import (
    FieldSlot,
    IMPORT_SLOTS,
    normalize_record,
    resolve_slot,
)
from parsers.field_coercer import (
    TABULAR_UNKNOWN_NAME,
    AI_UNKNOWN_NAME,
    coerce_code,
    coerce_name,
    coerce_qty,
    coerce_expiry_date,
    coerce_price,
    coerce_unit_label,
)

__all__ = [
    "read_import_records",
    "build_inventory_template",
    "FieldSlot",
    "IMPORT_SLOTS",
    "normalize_record",
    "resolve_slot",
    "TABULAR_UNKNOWN_NAME",
    "AI_UNKNOWN_NAME",
    "coerce_code",
    "coerce_name",
    "coerce_qty",
    "coerce_expiry_date",
    "coerce_price",
    "coerce_unit_label",
]
