"""
Product catalog API routes.
"""

from fastapi import APIRouter, Query
from typing import Optional
import structlog

from models.product import CatalogProduct, ProductSearchResponse
from services.product_service import get_product_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=ProductSearchResponse)
async def list_products(
    q: Optional[str] = Query(None, description="Search by partial name or code"),
    limit: int = Query(10, ge=1, le=100, description="Max search results"),
):
    """
    List the catalog, or search it when `q` is given.
    """
    try:
        service = get_product_service()
        products = service.search(q, limit) if q else service.get_all()
        return ProductSearchResponse(data=products, total=len(products))

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=CatalogProduct)
async def get_product(product_id: str):
    """
    Get a single product by ID.

    Raises:
        404: Product not found
    """
    try:
        return get_product_service().get_by_id(product_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=CatalogProduct, status_code=201)
async def create_product(data: CatalogProduct):
    """Create a product (id generated when omitted)."""
    try:
        return get_product_service().upsert(data)

    except Exception as e:
        return handle_error(e)


@router.put("/{product_id}", response_model=CatalogProduct)
async def upsert_product(product_id: str, data: CatalogProduct):
    """Create or overwrite the product with this id."""
    try:
        product = data.model_copy(update={"id": product_id})
        return get_product_service().upsert(product)

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str):
    """
    Delete a product.

    Raises:
        404: Product not found
    """
    try:
        get_product_service().delete(product_id)
        return None

    except Exception as e:
        return handle_error(e)
