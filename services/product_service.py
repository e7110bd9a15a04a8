"""
Product catalog store.

Wraps the Supabase `products` table. The reconciliation engine reads the
whole catalog once per import and writes to it only when the operator
confirms new products.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.product import CatalogProduct
from exceptions import ProductNotFoundError, DatabaseError
from services.catalog_matcher import search_products, SEARCH_LIMIT

logger = structlog.get_logger(__name__)


class ProductService:
    """
    Product catalog operations.

    Handles reads, upserts and deletes for catalog products.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "products"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[CatalogProduct]:
        """
        Get the full catalog ordered by name.

        Returns:
            List of CatalogProduct
        """
        logger.debug("getting_products")

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("name")
                .execute()
            )

            products = [CatalogProduct(**row) for row in result.data]

            logger.info("products_retrieved", count=len(products))

            return products

        except Exception as e:
            logger.error("get_products_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, product_id: str) -> CatalogProduct:
        """
        Get a single product by ID.

        Args:
            product_id: Product ID

        Returns:
            CatalogProduct

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.debug("getting_product", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", product_id)
                .execute()
            )

            if not result.data:
                raise ProductNotFoundError(product_id)

            return CatalogProduct(**result.data[0])

        except ProductNotFoundError:
            raise
        except Exception as e:
            logger.error(
                "get_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> list[CatalogProduct]:
        """
        Find products by partial name or code.

        Args:
            query: Text typed in the grid's code/name cell
            limit: Maximum results

        Returns:
            Matching products, at most `limit`
        """
        return search_products(self.get_all(), query, limit)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def upsert(self, product: CatalogProduct) -> CatalogProduct:
        """
        Create or overwrite a product by id.

        Args:
            product: Product to store

        Returns:
            Stored CatalogProduct
        """
        return self.upsert_many([product])[0]

    def upsert_many(self, products: list[CatalogProduct]) -> list[CatalogProduct]:
        """
        Create or overwrite several products in one request.

        Ids are kept as given, so candidates keep their tentative ids.

        Args:
            products: Products to store

        Returns:
            Stored products
        """
        if not products:
            return []

        logger.info("upserting_products", count=len(products))

        try:
            payload = [p.model_dump() for p in products]

            result = (
                self.db.table(self.table)
                .upsert(payload)
                .execute()
            )

            stored = [CatalogProduct(**row) for row in result.data]

            logger.info(
                "products_upserted",
                count=len(stored),
                product_ids=[p.id for p in stored]
            )

            return stored

        except Exception as e:
            logger.error(
                "upsert_products_failed",
                count=len(products),
                error=str(e)
            )
            raise DatabaseError("upsert", str(e))

    def delete(self, product_id: str) -> bool:
        """
        Delete a product.

        Args:
            product_id: Product ID

        Returns:
            True if deleted

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.info("deleting_product", product_id=product_id)

        self.get_by_id(product_id)

        try:
            self.db.table(self.table).delete().eq("id", product_id).execute()

            logger.info("product_deleted", product_id=product_id)

            return True

        except Exception as e:
            logger.error(
                "delete_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))


# Singleton instance for convenience
_product_service: Optional[ProductService] = None


def get_product_service() -> ProductService:
    """Get or create ProductService instance."""
    global _product_service
    if _product_service is None:
        _product_service = ProductService()
    return _product_service
