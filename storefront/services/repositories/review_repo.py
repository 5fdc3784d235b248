"""Review Repository - Product reviews."""
from typing import Any, Dict, List

from .base import BaseRepository


class ReviewRepository(BaseRepository):
    """Review database operations."""

    async def create_many(self, rows: List[Dict[str, Any]]) -> None:
        await self._run(lambda: self.client.table("reviews").insert(rows).execute())

    async def get_rating(self, product_id: int) -> Dict[str, Any]:
        """Average rating and review count for a product."""
        reviews = await self._run(
            lambda: self.client.table("reviews").select("rating").eq("product_id", product_id).execute()
        )

        ratings = [r["rating"] for r in reviews.data if r.get("rating")]
        return {
            "average": round(sum(ratings) / len(ratings), 1) if ratings else 0,
            "count": len(ratings),
        }
