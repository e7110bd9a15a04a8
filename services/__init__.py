"""
Business logic services.

Each service handles one domain area.
"""

from services.product_service import ProductService, get_product_service
from services.unit_service import UnitService, get_unit_service
from services.list_service import ListService, get_list_service
from services.tag_list_service import TagListService, get_tag_list_service
from services.extraction_service import ExtractionService, get_extraction_service
from services.reconciliation_service import (
    ReconciliationService,
    get_reconciliation_service,
)

__all__ = [
    "ProductService",
    "get_product_service",
    "UnitService",
    "get_unit_service",
    "ListService",
    "get_list_service",
    "TagListService",
    "get_tag_list_service",
    "ExtractionService",
    "get_extraction_service",
    "ReconciliationService",
    "get_reconciliation_service",
]
