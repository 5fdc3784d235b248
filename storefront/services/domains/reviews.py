"""Product reviews for delivered orders."""
from typing import Iterable, List

from storefront.errors import (
    ERROR_ORDER_NOT_DELIVERED,
    ERROR_ORDER_NOT_FOUND,
    ERROR_REVIEW_FAILED,
    ERROR_REVIEW_INCOMPLETE,
    ReviewError,
)
from storefront.logging import get_logger
from storefront.models import OrderDetails, OrderStatus, ReviewInput
from storefront.services.repositories import OrderRepository, ReviewRepository

logger = get_logger(__name__)


class ReviewsDomain:
    """Collects one rating per ordered product once an order is delivered."""

    def __init__(self, orders: OrderRepository, reviews: ReviewRepository):
        self.orders = orders
        self.reviews = reviews

    async def get_reviewable_order(self, order_id: str) -> OrderDetails:
        """The order, if it exists and has been delivered."""
        order = await self.orders.get_by_order_id(order_id)
        if order is None:
            raise ReviewError(ERROR_ORDER_NOT_FOUND)
        if order.status != OrderStatus.DELIVERED:
            raise ReviewError(ERROR_ORDER_NOT_DELIVERED)
        return order

    async def submit(self, order_id: str, reviews: Iterable[ReviewInput]) -> int:
        """
        Store reviews for every product of a delivered order.

        Returns:
            Number of review rows written
        """
        order = await self.get_reviewable_order(order_id)
        by_product = {review.product_id: review for review in reviews}

        rows: List[dict] = []
        for item in order.items:
            review = by_product.get(item.id)
            if review is None or review.rating < 1:
                raise ReviewError(ERROR_REVIEW_INCOMPLETE)
            rows.append({
                "order_id": order.order_id,
                "product_id": item.id,
                "customer_name": order.customer.full_name,
                "customer_email": order.customer.email,
                "rating": review.rating,
                "review_text": review.review_text,
            })

        try:
            await self.reviews.create_many(rows)
        except Exception as e:
            logger.error(f"Failed to submit reviews for order {order_id}: {e}")
            raise ReviewError(ERROR_REVIEW_FAILED) from e

        logger.info(f"Stored {len(rows)} reviews for order {order_id}")
        return len(rows)
