"""
Unit API routes (read-only).
"""

from fastapi import APIRouter

from models.product import Unit
from services.unit_service import get_unit_service
from routes.errors import handle_error

router = APIRouter()


@router.get("", response_model=list[Unit])
async def list_units():
    """List units of measure."""
    try:
        return get_unit_service().get_all()

    except Exception as e:
        return handle_error(e)
