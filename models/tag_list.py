"""
Price-label projects.

Created from newly accepted products so the operator can print shelf
labels for them straight after an AI import.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from models.base import BaseSchema, new_id


DEFAULT_TAG_STYLES: dict[str, Any] = {
    "name_font_size": 14,
    "price_font_size": 28,
    "name_color": "#000000",
    "price_color": "#DC2626",
    "unit_color": "#6B7280",
    "currency_color": "#000000",
    "original_price_color": "#EF4444",
    "show_logo": True,
    "logo_url": None,
    "logo_size": 30,
    "top_margin": 0,
    "bottom_margin": 0,
    "left_margin": 0,
    "right_margin": 0,
    "tag_height": 37,
    "show_border": True,
    "show_unit": True,
    "show_original_price": False,
    "template": "classic_vertical",
    "background_color": "#ffffff",
}


class PriceTag(BaseSchema):
    """One label."""

    id: str = Field(default_factory=new_id)
    product_id: str
    name: str
    price: str = "0"
    unit_name: str = ""
    original_price: str = ""


class TagList(BaseSchema):
    """A saved set of labels with their print styles."""

    id: str = Field(default_factory=new_id)
    name: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    tags: list[PriceTag] = Field(default_factory=list)
    styles: dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_TAG_STYLES))
