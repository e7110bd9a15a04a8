"""
In-memory stand-ins for the Supabase-backed services.

ReconciliationService accepts these in place of ProductService,
UnitService and TagListService.
"""

from typing import Optional

from models.product import CatalogProduct, Unit
from exceptions import DatabaseError


class FakeProductStore:
    """Catalog held in a list; records every upsert."""

    def __init__(self, products: Optional[list[CatalogProduct]] = None, fail_writes: bool = False):
        self.products = list(products or [])
        self.fail_writes = fail_writes
        self.upserted: list[CatalogProduct] = []

    def get_all(self) -> list[CatalogProduct]:
        return list(self.products)

    def upsert_many(self, products: list[CatalogProduct]) -> list[CatalogProduct]:
        if self.fail_writes:
            raise DatabaseError("upsert", "connection refused")
        self.upserted.extend(products)
        self.products.extend(products)
        return list(products)


class FakeUnitStore:
    def __init__(self, units: Optional[list[Unit]] = None):
        self.units = list(units or [])

    def get_all(self) -> list[Unit]:
        return list(self.units)


class FakeTagListStore:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[list[CatalogProduct]] = []

    def create_for_products(self, products, units, created_at=None):
        if self.fail:
            raise DatabaseError("insert", "tag_lists unavailable")
        self.calls.append(list(products))
