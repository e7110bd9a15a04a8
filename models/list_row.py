"""
Editable grid rows and saved lists.

A grid is an ordered list of ListRow. The last row is the blank
"next entry" slot; see services/row_merge.py for the merge rules that
keep it there.
"""

from datetime import date as date_type
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import Field, field_validator

from models.base import BaseSchema, new_id


# "" means the operator has not entered a quantity yet
Quantity = Union[int, float, Literal[""]]


class ListType(str, Enum):
    """Kind of list being built."""
    INVENTORY = "inventory"
    RECEIPT = "receipt"


class ListRow(BaseSchema):
    """One editable line in an inventory/receipt grid."""

    id: str = Field(default_factory=new_id, description="Row ID, stable across edits")
    code: str = Field("", description="Product code")
    name: str = Field("", description="Product name; empty marks a blank row")
    unit_id: str = Field("", description="Unit ID or empty")
    qty: Quantity = Field("", description="Quantity, or '' when unset")
    expiry_date: str = Field("", description="ISO date (YYYY-MM-DD) or empty")
    note: str = Field("", description="Free text note")
    is_dismissed: bool = Field(False, description="Reserved")

    @field_validator("code", "name", "unit_id", "expiry_date", "note", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def is_blank(self) -> bool:
        """Row carries no product name."""
        return not self.name.strip()


class SavedListCreate(BaseSchema):
    """Save (create or overwrite) a list."""

    id: Optional[str] = Field(None, description="Existing list ID to overwrite")
    name: str = Field("", description="List title; defaulted from type when empty")
    date: date_type = Field(default_factory=date_type.today)
    type: ListType = ListType.INVENTORY
    rows: list[ListRow] = Field(default_factory=list)


class SavedList(BaseSchema):
    """Persisted list."""

    id: str
    name: str
    date: date_type
    type: ListType = ListType.INVENTORY
    rows: list[ListRow] = Field(default_factory=list)


class GridTotals(BaseSchema):
    """Footer numbers shown under the grid."""

    total_qty: float = 0
    valid_rows: int = 0


class ExpiryStatus(str, Enum):
    """How close a row's expiry date is."""
    EXPIRED = "expired"
    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"


class RowExpiry(BaseSchema):
    """Expiry badge for one row."""

    row_id: str
    days: Optional[int] = None
    status: ExpiryStatus = ExpiryStatus.NORMAL


class GridSummaryRequest(BaseSchema):
    """Grid to summarize."""

    rows: list[ListRow] = Field(default_factory=list)
    today: Optional[date_type] = None


class GridSummary(BaseSchema):
    """Footer totals plus per-row expiry badges."""

    totals: GridTotals
    expiry: list[RowExpiry] = Field(default_factory=list)


class AssignProductRequest(BaseSchema):
    """Fill a row from a catalog product picked in search."""

    row: ListRow
    product_id: str
