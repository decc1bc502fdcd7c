"""Product Repository - catalog reads used by the add-to-cart flow."""
from typing import Optional

from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.models import Product
from .base import BaseRepository

logger = get_logger(__name__)


class ProductRepository(BaseRepository):
    """Product lookups (async client)."""

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID, or None when there is no such row."""
        result = await self.client.table("products").select("*").eq("id", product_id).limit(1).execute()

        if not result.data:
            logger.debug(f"Product {sanitize_id_for_logging(product_id)} not found")
            return None

        return Product(**result.data[0])
