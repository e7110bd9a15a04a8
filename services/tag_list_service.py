"""
Price-label projects for newly added products.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from config import get_supabase_client
from models.product import CatalogProduct, Unit
from models.tag_list import PriceTag, TagList
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)

AUTO_IMPORT_LABEL_PREFIX = "استيراد تلقائي"  # "automatic import"


class TagListService:
    """Creates label projects in the `tag_lists` table."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "tag_lists"

    def create_for_products(
        self,
        products: list[CatalogProduct],
        units: list[Unit],
        created_at: Optional[datetime] = None,
    ) -> TagList:
        """
        Create one label per product with default styles.

        Args:
            products: Products that need shelf labels
            units: Units, for the label's unit name
            created_at: Project timestamp (defaults to now)

        Returns:
            Stored TagList
        """
        created_at = created_at or datetime.now(timezone.utc)
        unit_names = {u.id: u.name for u in units}

        tag_list = TagList(
            name=f"{AUTO_IMPORT_LABEL_PREFIX} - {created_at.date().isoformat()}",
            date=created_at,
            tags=[
                PriceTag(
                    product_id=p.id,
                    name=p.name,
                    price=p.price or "0",
                    unit_name=unit_names.get(p.unit_id, ""),
                )
                for p in products
            ],
        )

        logger.info("creating_tag_list", tag_list_id=tag_list.id, tag_count=len(tag_list.tags))

        try:
            self.db.table(self.table).insert(tag_list.model_dump(mode="json")).execute()
            logger.info("tag_list_created", tag_list_id=tag_list.id)
            return tag_list

        except Exception as e:
            logger.error("create_tag_list_failed", tag_list_id=tag_list.id, error=str(e))
            raise DatabaseError("insert", str(e))


_tag_list_service: Optional[TagListService] = None


def get_tag_list_service() -> TagListService:
    """Get or create TagListService instance."""
    global _tag_list_service
    if _tag_list_service is None:
        _tag_list_service = TagListService()
    return _tag_list_service
