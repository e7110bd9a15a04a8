"""
Reconciliation schemas: extracted items, candidates and import sessions.

An ImportSession is an immutable value. The orchestrator in
services/reconciliation_service.py moves it between states by returning
new copies, so the candidate selection is always passed explicitly.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.base import BaseSchema, new_id
from models.list_row import ListRow
from models.product import CatalogProduct


# One spreadsheet row: original header -> raw cell value
ImportRecord = dict[str, Any]


class ExtractedItem(BaseModel):
    """
    One item returned by the AI extraction service.

    Values are loosely typed on purpose; the field coercer cleans them.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: Optional[Any] = None
    name: Optional[Any] = None
    qty: Optional[Any] = None
    unit: Optional[Any] = None
    expiry_date: Optional[Any] = Field(None, alias="expiryDate")
    price: Optional[Any] = None


class MatchStrategy(str, Enum):
    """How names are compared against the catalog."""
    TABULAR = "tabular"  # exact, case-insensitive
    AI = "ai"            # exact or containment, case-insensitive


class ImportSource(str, Enum):
    """Where the import came from."""
    TABULAR = "tabular"
    AI = "ai"


class ImportState(str, Enum):
    """Orchestrator states for a single import action."""
    IDLE = "idle"
    READING = "reading"
    NORMALIZING = "normalizing"
    MATCHING = "matching"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    MERGING = "merging"


class PendingProductCandidate(CatalogProduct):
    """
    Product found during an AI import with no catalog match.

    Its id is kept when the operator accepts it into the catalog.
    """
    pass


class ImportSession(BaseSchema):
    """Snapshot of one import action between reading and merging."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    source: ImportSource
    state: ImportState = ImportState.IDLE
    rows: list[ListRow] = Field(default_factory=list, description="Processed rows awaiting merge")
    candidates: list[PendingProductCandidate] = Field(default_factory=list)
    selected_ids: frozenset[str] = Field(default_factory=frozenset)

    @property
    def selected_candidates(self) -> list[PendingProductCandidate]:
        return [c for c in self.candidates if c.id in self.selected_ids]


class AiImportResult(BaseSchema):
    """
    Outcome of an AI import.

    When `candidates` is empty the merge has already happened and `grid`
    holds the updated rows; otherwise `session` waits for confirmation.
    """
    rows: list[ListRow]
    candidates: list[PendingProductCandidate] = Field(default_factory=list)
    session: ImportSession
    grid: Optional[list[ListRow]] = None

    @property
    def needs_confirmation(self) -> bool:
        return self.session.state == ImportState.AWAITING_CONFIRMATION


# ===================
# REQUEST BODIES
# ===================

class TabularRecordsRequest(BaseSchema):
    """Already-parsed spreadsheet records plus the current grid."""
    records: list[ImportRecord]
    existing_rows: Optional[list[ListRow]] = None


class MergeRequest(BaseSchema):
    """Merge incoming rows into the current grid."""
    existing_rows: list[ListRow] = Field(default_factory=list)
    incoming_rows: list[ListRow] = Field(default_factory=list)


class SelectionUpdate(BaseSchema):
    """Replace the selected candidate ids."""
    selected_ids: list[str]


class ConfirmRequest(BaseSchema):
    """
    Operator decision on pending candidates.

    selected_ids=None keeps the session's current selection.
    """
    selected_ids: Optional[list[str]] = None
    persist: bool = True
    create_labels: bool = False
    existing_rows: Optional[list[ListRow]] = None


class GridResponse(BaseSchema):
    """Updated grid returned to the client."""
    rows: list[ListRow]
    imported: int = Field(0, description="Number of rows added by this action")
