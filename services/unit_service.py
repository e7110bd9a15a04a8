"""
Unit store (read-only).
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.product import Unit
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class UnitService:
    """Reads units of measure."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "units"

    def get_all(self) -> list[Unit]:
        """
        Get all units ordered by name.

        Returns:
            List of Unit
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("name")
                .execute()
            )

            units = [Unit(**row) for row in result.data]
            logger.debug("units_retrieved", count=len(units))
            return units

        except Exception as e:
            logger.error("get_units_failed", error=str(e))
            raise DatabaseError("select", str(e))


_unit_service: Optional[UnitService] = None


def get_unit_service() -> UnitService:
    """Get or create UnitService instance."""
    global _unit_service
    if _unit_service is None:
        _unit_service = UnitService()
    return _unit_service
