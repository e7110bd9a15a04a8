"""
Saved inventory/receipt lists.

Only named rows are saved; the blank entry slot and any abandoned blank
rows stay client-side.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.base import new_id
from models.list_row import ListType, SavedList, SavedListCreate
from exceptions import DatabaseError, EmptyListError, ListNotFoundError

logger = structlog.get_logger(__name__)

DEFAULT_LIST_NAMES = {
    ListType.INVENTORY: "قائمة جرد",       # "inventory list"
    ListType.RECEIPT: "استلام طلبية",      # "order receipt"
}


class ListService:
    """CRUD for saved lists."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "lists"

    def get_all(self) -> list[SavedList]:
        """
        Get saved lists, newest first.

        Returns:
            List of SavedList
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("date", desc=True)
                .execute()
            )
            lists = [SavedList(**row) for row in result.data]
            logger.info("lists_retrieved", count=len(lists))
            return lists

        except Exception as e:
            logger.error("get_lists_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, list_id: str) -> SavedList:
        """
        Get one saved list.

        Raises:
            ListNotFoundError: If the list doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", list_id)
                .execute()
            )

            if not result.data:
                raise ListNotFoundError(list_id)

            return SavedList(**result.data[0])

        except ListNotFoundError:
            raise
        except Exception as e:
            logger.error("get_list_failed", list_id=list_id, error=str(e))
            raise DatabaseError("select", str(e))

    def save(self, data: SavedListCreate) -> SavedList:
        """
        Create or overwrite a list.

        Args:
            data: List to save; blank rows are dropped

        Returns:
            Saved list

        Raises:
            EmptyListError: If no row has a name
        """
        valid_rows = [row for row in data.rows if not row.is_blank]
        if not valid_rows:
            raise EmptyListError()

        saved = SavedList(
            id=data.id or new_id(),
            name=data.name or DEFAULT_LIST_NAMES[data.type],
            date=data.date,
            type=data.type,
            rows=valid_rows,
        )

        logger.info(
            "saving_list",
            list_id=saved.id,
            list_type=saved.type.value,
            row_count=len(valid_rows)
        )

        try:
            self.db.table(self.table).upsert(saved.model_dump(mode="json")).execute()

            logger.info("list_saved", list_id=saved.id)

            return saved

        except Exception as e:
            logger.error("save_list_failed", list_id=saved.id, error=str(e))
            raise DatabaseError("upsert", str(e))

    def delete(self, list_id: str) -> bool:
        """Delete a saved list."""
        logger.info("deleting_list", list_id=list_id)

        try:
            self.db.table(self.table).delete().eq("id", list_id).execute()
            logger.info("list_deleted", list_id=list_id)
            return True

        except Exception as e:
            logger.error("delete_list_failed", list_id=list_id, error=str(e))
            raise DatabaseError("delete", str(e))


_list_service: Optional[ListService] = None


def get_list_service() -> ListService:
    """Get or create ListService instance."""
    global _list_service
    if _list_service is None:
        _list_service = ListService()
    return _list_service
