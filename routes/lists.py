"""
Saved list API routes and grid helpers.
"""

from fastapi import APIRouter
import structlog

from models.list_row import (
    AssignProductRequest,
    GridSummary,
    GridSummaryRequest,
    ListRow,
    RowExpiry,
    SavedList,
    SavedListCreate,
)
from models.reconciliation import GridResponse
from services.list_service import get_list_service
from services.product_service import get_product_service
from services.row_merge import assign_product, ensure_grid, expiry_status, grid_totals
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# GRID HELPERS
# ===================

@router.post("/summary", response_model=GridSummary)
async def summarize_grid(request: GridSummaryRequest):
    """Totals and expiry badges for the rows on screen."""
    try:
        expiry = []
        for row in request.rows:
            days, status = expiry_status(row.expiry_date, request.today)
            expiry.append(RowExpiry(row_id=row.id, days=days, status=status))

        return GridSummary(totals=grid_totals(request.rows), expiry=expiry)

    except Exception as e:
        return handle_error(e)


@router.post("/rows/assign", response_model=ListRow)
async def assign_product_to_row(request: AssignProductRequest):
    """
    Fill a row from a product picked in search.

    Raises:
        404: Product not found
    """
    try:
        product = get_product_service().get_by_id(request.product_id)
        return assign_product(request.row, product)

    except Exception as e:
        return handle_error(e)


# ===================
# SAVED LISTS
# ===================

@router.get("", response_model=list[SavedList])
async def list_saved_lists():
    """Saved lists, newest first."""
    try:
        return get_list_service().get_all()

    except Exception as e:
        return handle_error(e)


@router.get("/{list_id}", response_model=SavedList)
async def get_saved_list(list_id: str):
    """
    Get one saved list.

    Raises:
        404: List not found
    """
    try:
        return get_list_service().get_by_id(list_id)

    except Exception as e:
        return handle_error(e)


@router.get("/{list_id}/grid", response_model=GridResponse)
async def open_saved_list(list_id: str):
    """Rows of a saved list ready for editing (never empty)."""
    try:
        saved = get_list_service().get_by_id(list_id)
        return GridResponse(rows=ensure_grid(saved.rows))

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=SavedList, status_code=201)
async def save_list(data: SavedListCreate):
    """
    Save a list (blank rows are dropped).

    Raises:
        422: No named rows
    """
    try:
        return get_list_service().save(data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{list_id}", status_code=204)
async def delete_saved_list(list_id: str):
    """Delete a saved list."""
    try:
        get_list_service().delete(list_id)
        return None

    except Exception as e:
        return handle_error(e)
