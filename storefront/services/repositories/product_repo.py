"""Product Repository - Catalog reads."""
from typing import List, Optional

from .base import BaseRepository
from storefront.models import Product


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_all(self) -> List[Product]:
        """All products, newest first."""
        result = await self._run(
            lambda: self.client.table("products").select("*").order("created_at", desc=True).execute()
        )
        return [Product(**p) for p in result.data]

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        result = await self._run(
            lambda: self.client.table("products").select("*").eq("id", product_id).execute()
        )
        return Product(**result.data[0]) if result.data else None
