"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import date
from typing import Optional
from uuid import uuid4

from models.list_row import ListRow


class ProductFactory:
    """
    Factory for creating test catalog product rows.

    Usage:
        # Create with defaults
        product = ProductFactory.create()

        # Create with overrides
        product = ProductFactory.create(code="1001", name="سكر")

        # Create multiple
        products = ProductFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        code: Optional[str] = None,
        name: Optional[str] = None,
        unit_id: Optional[str] = "",
        price: Optional[str] = None,
        color: Optional[str] = None,
    ) -> dict:
        """
        Create a single product dict.

        Args:
            id: Product id (auto-generated if not provided)
            code: Product code (auto-generated if not provided)
            name: Product name (auto-generated if not provided)
            unit_id: Unit id, "" when unknown
            price: Price as text
            color: Display colour

        Returns:
            Product dict matching database schema
        """
        counter = cls._next_counter()

        return {
            "id": id or str(uuid4()),
            "code": code if code is not None else f"{9000 + counter}",
            "name": name or f"منتج اختبار {counter}",
            "unit_id": unit_id,
            "price": price,
            "cost_price": None,
            "color": color,
            "category": None,
            "description": None,
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple products."""
        return [cls.create(**overrides) for _ in range(count)]


class ListRowFactory:
    """Factory for grid rows."""

    @classmethod
    def create(
        cls,
        name: str = "سكر أبيض",
        code: str = "1001",
        qty=5,
        unit_id: str = "",
        expiry_date: str = "",
    ) -> ListRow:
        return ListRow(
            code=code,
            name=name,
            qty=qty,
            unit_id=unit_id,
            expiry_date=expiry_date,
        )

    @classmethod
    def blank(cls) -> ListRow:
        return ListRow()


class SavedListFactory:
    """Factory for saved list rows as stored in the `lists` table."""

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        name: str = "جرد المخزن",
        list_date: Optional[date] = None,
        type: str = "inventory",
        rows: Optional[list[dict]] = None,
    ) -> dict:
        return {
            "id": id or str(uuid4()),
            "name": name,
            "date": (list_date or date(2025, 1, 15)).isoformat(),
            "type": type,
            "rows": rows if rows is not None else [
                ListRowFactory.create().model_dump()
            ],
        }
