"""
Row merge engine and grid helpers.

The grid always ends with exactly one blank row, the slot where the
operator types the next entry. Imports drop every existing blank row,
append their rows, and add a fresh blank slot at the end.

merge_rows is not idempotent: merging the same rows twice duplicates
them. Call it once per import action.
"""

from datetime import date
from typing import Iterable, Optional

from models.list_row import ExpiryStatus, GridTotals, ListRow
from models.product import CatalogProduct

EXPIRY_CRITICAL_DAYS = 30
EXPIRY_WARNING_DAYS = 90


def create_empty_row() -> ListRow:
    """Fresh blank row with a new id."""
    return ListRow()


def merge_rows(existing_rows: Iterable[ListRow], new_rows: Iterable[ListRow]) -> list[ListRow]:
    """
    Merge imported rows into the grid.

    1. Drop existing rows whose name is empty or whitespace.
    2. Append `new_rows` in order.
    3. Append one blank row.

    Args:
        existing_rows: Current grid
        new_rows: Rows produced by an import

    Returns:
        New grid list; inputs are not modified
    """
    kept = [row for row in existing_rows if not row.is_blank]
    return [*kept, *new_rows, create_empty_row()]


def ensure_grid(rows: Optional[list[ListRow]]) -> list[ListRow]:
    """A grid with no rows gets its blank entry slot."""
    return list(rows) if rows else [create_empty_row()]


def assign_product(row: ListRow, product: CatalogProduct) -> ListRow:
    """Copy of `row` filled from a catalog pick (code, name, unit)."""
    return row.model_copy(update={
        "code": product.code,
        "name": product.name,
        "unit_id": product.unit_id,
    })


def grid_totals(rows: Iterable[ListRow]) -> GridTotals:
    """Total quantity and number of named rows."""
    total_qty = 0.0
    valid_rows = 0
    for row in rows:
        if row.qty != "":
            total_qty += row.qty
        if not row.is_blank:
            valid_rows += 1
    return GridTotals(total_qty=total_qty, valid_rows=valid_rows)


def expiry_status(expiry_date: str, today: Optional[date] = None) -> tuple[Optional[int], ExpiryStatus]:
    """
    Days left until expiry and the matching status.

    - ≤ 0 days  → EXPIRED
    - ≤ 30 days → CRITICAL
    - ≤ 90 days → WARNING
    - otherwise → NORMAL

    Empty or unparseable dates are NORMAL with no day count.
    """
    if not expiry_date:
        return None, ExpiryStatus.NORMAL

    try:
        expires = date.fromisoformat(expiry_date)
    except ValueError:
        return None, ExpiryStatus.NORMAL

    days = (expires - (today or date.today())).days

    if days <= 0:
        return days, ExpiryStatus.EXPIRED
    if days <= EXPIRY_CRITICAL_DAYS:
        return days, ExpiryStatus.CRITICAL
    if days <= EXPIRY_WARNING_DAYS:
        return days, ExpiryStatus.WARNING
    return days, ExpiryStatus.NORMAL
