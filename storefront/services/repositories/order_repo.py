"""Order Repository - Order persistence."""
from typing import List, Optional

from .base import BaseRepository
from storefront.models import OrderDetails


class OrderRepository(BaseRepository):
    """Order database operations."""

    async def create(self, order: OrderDetails) -> OrderDetails:
        """Insert a placed order."""
        record = order.to_record()
        result = await self._run(lambda: self.client.table("orders").insert(record).execute())
        return OrderDetails.from_record(result.data[0]) if result.data else order

    async def get_by_order_id(self, order_id: str) -> Optional[OrderDetails]:
        result = await self._run(
            lambda: self.client.table("orders").select("*").eq("order_id", order_id).execute()
        )
        return OrderDetails.from_record(result.data[0]) if result.data else None

    async def get_all(self) -> List[OrderDetails]:
        """All orders, newest first."""
        result = await self._run(
            lambda: self.client.table("orders").select("*").order("created_at", desc=True).execute()
        )
        return [OrderDetails.from_record(o) for o in result.data]

    async def update_status(self, order_id: str, status: str) -> None:
        await self._run(
            lambda: self.client.table("orders").update({"status": status}).eq("order_id", order_id).execute()
        )
