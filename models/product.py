"""
Catalog product and unit schemas.
"""

from pydantic import Field, field_validator
from typing import Any, Optional

from models.base import BaseSchema, new_id


class Unit(BaseSchema):
    """Unit of measure (piece, box, kilo...). Read-only reference data."""

    id: str = Field(..., description="Unit ID")
    name: str = Field(..., description="Display name, e.g. 'قطعة'")


class CatalogProduct(BaseSchema):
    """
    Persisted, reusable product definition.

    `code` is the matching key used during imports. It is not enforced
    unique by the store; lookups take the first hit.
    """

    id: str = Field(default_factory=new_id, description="Product ID")
    code: str = Field("", max_length=100, description="Short human identifier / SKU")
    name: str = Field(..., min_length=1, description="Product name")
    unit_id: str = Field("", description="Unit ID, empty when unknown")
    price: Optional[str] = Field(None, description="Selling price as decimal string")
    cost_price: Optional[str] = Field(None, description="Cost price as decimal string")
    color: Optional[str] = Field(None, description="Display tag colour")
    category: Optional[str] = Field(None, description="Free-form category")
    description: Optional[str] = Field(None, description="Free-form description")

    @field_validator("code", "unit_id", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Database nulls become empty strings."""
        return "" if v is None else v


class ProductSearchResponse(BaseSchema):
    """Catalog search result."""

    data: list[CatalogProduct]
    total: int
