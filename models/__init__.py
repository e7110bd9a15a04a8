"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, new_id
from models.product import (
    Unit,
    CatalogProduct,
    ProductSearchResponse,
)
from models.list_row import (
    Quantity,
    ListType,
    ListRow,
    SavedListCreate,
    SavedList,
    GridTotals,
    ExpiryStatus,
    RowExpiry,
    GridSummaryRequest,
    GridSummary,
    AssignProductRequest,
)
from models.reconciliation import (
    ImportRecord,
    ExtractedItem,
    MatchStrategy,
    ImportSource,
    ImportState,
    PendingProductCandidate,
    ImportSession,
    AiImportResult,
    TabularRecordsRequest,
    MergeRequest,
    SelectionUpdate,
    ConfirmRequest,
    GridResponse,
)
from models.tag_list import PriceTag, TagList, DEFAULT_TAG_STYLES

__all__ = [
    # Base
    "BaseSchema",
    "new_id",

    # Catalog
    "Unit",
    "CatalogProduct",
    "ProductSearchResponse",

    # Grid
    "Quantity",
    "ListType",
    "ListRow",
    "SavedListCreate",
    "SavedList",
    "GridTotals",
    "ExpiryStatus",
    "RowExpiry",
    "GridSummaryRequest",
    "GridSummary",
    "AssignProductRequest",

    # Reconciliation
    "ImportRecord",
    "ExtractedItem",
    "MatchStrategy",
    "ImportSource",
    "ImportState",
    "PendingProductCandidate",
    "ImportSession",
    "AiImportResult",
    "TabularRecordsRequest",
    "MergeRequest",
    "SelectionUpdate",
    "ConfirmRequest",
    "GridResponse",

    # Labels
    "PriceTag",
    "TagList",
    "DEFAULT_TAG_STYLES",
]
