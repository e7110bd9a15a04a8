"""
Header normalizer for tabular imports.

Operators upload spreadsheets with whatever column titles they like,
in Arabic or English ("كود الصنف", "Item Name", "Qty"...). Each canonical
field slot owns a set of aliases; a header belongs to a slot when its
lowercased text contains any alias.

Resolution is first-match-wins per slot, in the record's original
header order. Slots resolve independently, so one header may feed two
slots (e.g. "product code" matches both `code` and `name`).
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from models.reconciliation import ImportRecord
from utils.text_utils import is_missing


@dataclass(frozen=True)
class FieldSlot:
    """A canonical row field and the header fragments that map to it."""
    name: str
    aliases: tuple[str, ...]

    def matches(self, header: str) -> bool:
        text = str(header).lower()
        return any(alias.lower() in text for alias in self.aliases)


CODE_SLOT = FieldSlot("code", ("code", "كود", "رقم الصنف", "sku"))
NAME_SLOT = FieldSlot("name", ("name", "اسم", "صنف", "item", "product"))
QTY_SLOT = FieldSlot("qty", ("qty", "quantity", "كمية", "عدد", "رصيد"))
UNIT_SLOT = FieldSlot("unit", ("unit", "وحدة", "عبوة"))
EXPIRY_SLOT = FieldSlot("expiry_date", ("date", "expiry", "تاريخ", "صلاحية"))

# Evaluation order for a record
IMPORT_SLOTS: tuple[FieldSlot, ...] = (
    CODE_SLOT,
    NAME_SLOT,
    QTY_SLOT,
    UNIT_SLOT,
    EXPIRY_SLOT,
)


def find_header(headers: Iterable[str], slot: FieldSlot) -> Optional[str]:
    """Return the first header that belongs to `slot`, or None."""
    for header in headers:
        if slot.matches(header):
            return header
    return None


def resolve_slot(record: ImportRecord, slot: FieldSlot) -> Any:
    """
    Raw value of `slot` in `record`.

    Returns "" when no header qualifies or the cell is empty.
    """
    header = find_header(record.keys(), slot)
    if header is None:
        return ""
    value = record[header]
    return "" if is_missing(value) else value


def normalize_record(
    record: ImportRecord,
    slots: Iterable[FieldSlot] = IMPORT_SLOTS,
) -> dict[str, Any]:
    """
    Map one spreadsheet record onto canonical slots.

    Example:
        {"Item Name": "Sugar", "Qty": "5"}
        → {"code": "", "name": "Sugar", "qty": "5", "unit": "", "expiry_date": ""}
    """
    return {slot.name: resolve_slot(record, slot) for slot in slots}
