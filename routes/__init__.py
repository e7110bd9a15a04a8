"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.imports import router as imports_router
from routes.products import router as products_router
from routes.units import router as units_router
from routes.lists import router as lists_router

__all__ = [
    "imports_router",
    "products_router",
    "units_router",
    "lists_router",
]
