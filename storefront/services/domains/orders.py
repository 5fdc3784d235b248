"""Order administration: filtering, dashboard figures and status updates."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from storefront.errors import ERROR_ORDER_INVALID_STATUS, ERROR_ORDER_NOT_FOUND, OrderStatusError
from storefront.logging import get_logger
from storefront.models import OrderDetails, OrderStatus, Product
from storefront.services.repositories import OrderRepository, ProductRepository

logger = get_logger(__name__)

ALL_STATUSES = "All"
RECENT_ORDERS_LIMIT = 5


def parse_status(value: OrderStatus | str) -> OrderStatus:
    """Known order status, or OrderStatusError."""
    try:
        return OrderStatus(value)
    except ValueError:
        raise OrderStatusError(f"{ERROR_ORDER_INVALID_STATUS}: {value}") from None


def filter_orders(
    orders: Iterable[OrderDetails],
    search: str = "",
    status: str = ALL_STATUSES,
) -> List[OrderDetails]:
    """
    Orders matching a search term and status.

    The term matches order id, customer name or email, case-insensitively.
    """
    term = (search or "").strip().lower()
    result = []
    for order in orders:
        matches_search = (
            not term
            or term in order.order_id.lower()
            or term in order.customer.full_name.lower()
            or term in (order.customer.email or "").lower()
        )
        matches_status = status == ALL_STATUSES or order.status.value == status
        if matches_search and matches_status:
            result.append(order)
    return result


def _sort_key(order: OrderDetails) -> datetime:
    # Naive timestamps are treated as UTC so mixed rows still compare
    if order.order_date.tzinfo is None:
        return order.order_date.replace(tzinfo=timezone.utc)
    return order.order_date


@dataclass
class DashboardStats:
    """Figures for the admin dashboard."""

    total_products: int = 0
    total_orders: int = 0
    pending_orders: int = 0
    delivered_orders: int = 0
    total_revenue: Decimal = Decimal("0")
    recent_orders: List[OrderDetails] = field(default_factory=list)


def dashboard_stats(
    products: Sequence[Product],
    orders: Sequence[OrderDetails],
    recent_limit: int = RECENT_ORDERS_LIMIT,
) -> DashboardStats:
    """
    Catalog and order totals.

    Revenue sums every order that was not cancelled; recent orders are the
    newest `recent_limit` by order date.
    """
    stats = DashboardStats(total_products=len(products), total_orders=len(orders))
    for order in orders:
        if order.status == OrderStatus.PENDING:
            stats.pending_orders += 1
        elif order.status == OrderStatus.DELIVERED:
            stats.delivered_orders += 1
        if order.status != OrderStatus.CANCELLED:
            stats.total_revenue += order.total
    stats.recent_orders = sorted(orders, key=_sort_key, reverse=True)[:recent_limit]
    return stats


class OrdersDomain:
    """Order domain operations."""

    def __init__(self, repo: OrderRepository, products: Optional[ProductRepository] = None):
        self.repo = repo
        self.products = products

    async def get_by_order_id(self, order_id: str) -> Optional[OrderDetails]:
        return await self.repo.get_by_order_id(order_id)

    async def list_orders(self, search: str = "", status: str = ALL_STATUSES) -> List[OrderDetails]:
        return filter_orders(await self.repo.get_all(), search=search, status=status)

    async def get_dashboard(self) -> DashboardStats:
        products = await self.products.get_all() if self.products is not None else []
        return dashboard_stats(products, await self.repo.get_all())

    async def update_status(self, order_id: str, new_status: OrderStatus | str) -> OrderDetails:
        """
        Set an order's status.

        Any known status may be set from any other, so a mistaken change
        can be undone.

        Raises:
            OrderStatusError: unknown status or order
        """
        new_status = parse_status(new_status)

        order = await self.repo.get_by_order_id(order_id)
        if order is None:
            raise OrderStatusError(ERROR_ORDER_NOT_FOUND)

        await self.repo.update_status(order_id, new_status.value)
        logger.info(f"Updated order {order_id} status to {new_status.value}")
        return order.model_copy(update={"status": new_status})
