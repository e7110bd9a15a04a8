"""
Import API routes.

Spreadsheet and AI-scan imports into a list grid. The grid lives in the
client: each call receives the current rows and returns the updated ones.
AI imports that discover new products are held server-side until the
operator confirms or discards them.
"""

from io import BytesIO
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import TypeAdapter, ValidationError as PydanticValidationError
import structlog

from models.list_row import ListRow
from models.reconciliation import (
    AiImportResult,
    ConfirmRequest,
    GridResponse,
    ImportSession,
    MergeRequest,
    SelectionUpdate,
    TabularRecordsRequest,
)
from parsers.excel_parser import read_import_records, build_inventory_template
from services.extraction_service import get_extraction_service
from services.reconciliation_service import (
    get_reconciliation_service,
    discard,
    set_selection,
)
from services.import_session_store import (
    store_session,
    retrieve_session,
    delete_session,
)
from exceptions import ImportSessionNotFoundError, ValidationError
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()

_rows_adapter = TypeAdapter(list[ListRow])

TEMPLATE_FILENAME = "inventory_template.xlsx"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _parse_existing_rows(raw: Optional[str]) -> Optional[list[ListRow]]:
    """Grid rows sent as a JSON form field alongside a file upload."""
    if not raw:
        return None
    try:
        return _rows_adapter.validate_json(raw)
    except PydanticValidationError as e:
        raise ValidationError(
            message="existing_rows is not a valid list of rows",
            code="INVALID_EXISTING_ROWS",
            details={"error": str(e)}
        )


def _get_session(session_id: str) -> ImportSession:
    session = retrieve_session(session_id)
    if session is None:
        raise ImportSessionNotFoundError(session_id)
    return session


# ===================
# TABULAR IMPORT
# ===================

@router.post("/tabular", response_model=GridResponse)
async def import_tabular_file(
    file: UploadFile = File(...),
    existing_rows: Optional[str] = Form(None),
):
    """
    Import an Excel/CSV sheet into the grid.

    Raises:
        422: Unreadable file or no rows
    """
    logger.info(
        "tabular_upload_started",
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        rows = _parse_existing_rows(existing_rows)
        content = await file.read()
        records = read_import_records(BytesIO(content), filename=file.filename)

        service = get_reconciliation_service()
        grid = service.run_tabular_import(records, rows)

        return GridResponse(rows=grid, imported=len(records))

    except Exception as e:
        return handle_error(e)


@router.post("/tabular/records", response_model=GridResponse)
async def import_tabular_records(request: TabularRecordsRequest):
    """Import records a client already read from a sheet."""
    try:
        service = get_reconciliation_service()
        grid = service.run_tabular_import(request.records, request.existing_rows)
        return GridResponse(rows=grid, imported=len(request.records))

    except Exception as e:
        return handle_error(e)


@router.get("/template")
async def download_template():
    """Download the inventory import template."""
    try:
        output = build_inventory_template()
        return StreamingResponse(
            output,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'}
        )

    except Exception as e:
        return handle_error(e)


# ===================
# AI IMPORT
# ===================

@router.post("/ai", response_model=AiImportResult)
async def import_scanned_document(
    file: UploadFile = File(...),
    existing_rows: Optional[str] = Form(None),
):
    """
    Scan an image or PDF with AI extraction.

    With no new products the grid comes back merged. Otherwise the
    session is held for confirmation and `grid` is null.

    Raises:
        422: Not an image/PDF, unreadable AI response, or nothing found
        503: AI extraction unavailable
    """
    logger.info(
        "ai_upload_started",
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        rows = _parse_existing_rows(existing_rows)
        content = await file.read()

        items = await get_extraction_service().extract_items(content, file.content_type)

        result = get_reconciliation_service().run_ai_import(items, rows)
        if result.needs_confirmation:
            store_session(result.session)

        return result

    except Exception as e:
        return handle_error(e)


@router.post("/merge", response_model=GridResponse)
async def merge_rows(request: MergeRequest):
    """Merge rows into the grid (drops blank rows, adds a trailing blank)."""
    try:
        service = get_reconciliation_service()
        grid = service.merge_rows(request.existing_rows, request.incoming_rows)
        return GridResponse(rows=grid, imported=len(request.incoming_rows))

    except Exception as e:
        return handle_error(e)


@router.get("/{session_id}", response_model=ImportSession)
async def get_import_session(session_id: str):
    """
    Get a pending import.

    Raises:
        404: Session not found
    """
    try:
        return _get_session(session_id)

    except Exception as e:
        return handle_error(e)


@router.put("/{session_id}/selection", response_model=ImportSession)
async def update_selection(session_id: str, request: SelectionUpdate):
    """Replace which candidates are selected."""
    try:
        session = set_selection(_get_session(session_id), request.selected_ids)
        store_session(session)
        return session

    except Exception as e:
        return handle_error(e)


@router.post("/{session_id}/confirm", response_model=GridResponse)
async def confirm_import(session_id: str, request: ConfirmRequest):
    """
    Accept selected candidates and merge the scanned rows.

    Raises:
        404: Session not found
        500: Catalog write failed (session kept, grid unchanged)
    """
    try:
        session = _get_session(session_id)

        service = get_reconciliation_service()
        grid = service.confirm_candidates(
            session,
            selection=request.selected_ids,
            persist=request.persist,
            existing_rows=request.existing_rows,
            create_labels=request.create_labels,
        )
        delete_session(session_id)

        return GridResponse(rows=grid, imported=len(session.rows))

    except Exception as e:
        return handle_error(e)


@router.delete("/{session_id}", response_model=ImportSession)
async def discard_import(session_id: str):
    """Cancel a pending import; the grid is left untouched."""
    try:
        session = discard(_get_session(session_id))
        delete_session(session_id)
        return session

    except Exception as e:
        return handle_error(e)
