"""Customers derived from placed orders."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from storefront.models import OrderDetails, OrderStatus
from storefront.services.repositories import OrderRepository

ACTIVE_WINDOW_DAYS = 30


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@dataclass
class CustomerSummary:
    """One customer, keyed by name and phone number."""

    full_name: str
    phone_number: str
    email: str
    city: str
    province: str
    total_orders: int
    total_spent: Decimal
    last_order_date: datetime
    active: bool = True


@dataclass
class CustomerStats:
    total_customers: int
    active_customers: int
    total_revenue: Decimal
    average_order_value: Decimal


def aggregate_customers(
    orders: Iterable[OrderDetails],
    now: Optional[datetime] = None,
) -> List[CustomerSummary]:
    """
    Group orders into customers, biggest spenders first.

    Cancelled orders count towards total_orders but not total_spent. A
    customer is active when their last order is at most 30 days old.
    """
    now = _aware(now or datetime.now(timezone.utc))
    customers = {}
    for order in orders:
        info = order.customer
        key = (info.full_name, info.phone_number)
        spent = order.total if order.status != OrderStatus.CANCELLED else Decimal("0")
        order_date = _aware(order.order_date)

        customer = customers.get(key)
        if customer is None:
            customers[key] = CustomerSummary(
                full_name=info.full_name,
                phone_number=info.phone_number,
                email=info.email or "",
                city=info.city,
                province=info.province,
                total_orders=1,
                total_spent=spent,
                last_order_date=order_date,
            )
            continue

        customer.total_orders += 1
        customer.total_spent += spent
        if order_date > customer.last_order_date:
            customer.last_order_date = order_date

    result = list(customers.values())
    for customer in result:
        customer.active = (now - customer.last_order_date).days <= ACTIVE_WINDOW_DAYS
    result.sort(key=lambda c: c.total_spent, reverse=True)
    return result


def filter_customers(customers: Iterable[CustomerSummary], search: str = "") -> List[CustomerSummary]:
    """Case-insensitive match on name, email or city; phone matches as typed."""
    if not search:
        return list(customers)
    term = search.lower()
    return [
        c for c in customers
        if term in c.full_name.lower()
        or search in c.phone_number
        or term in c.email.lower()
        or term in c.city.lower()
    ]


def customer_stats(customers: Sequence[CustomerSummary]) -> CustomerStats:
    """Totals over aggregated customers; average is revenue per order."""
    revenue = sum((c.total_spent for c in customers), Decimal("0"))
    order_count = sum(c.total_orders for c in customers)
    return CustomerStats(
        total_customers=len(customers),
        active_customers=sum(1 for c in customers if c.active),
        total_revenue=revenue,
        average_order_value=revenue / order_count if order_count else Decimal("0"),
    )


class CustomersDomain:
    """Customer listing built from the orders table."""

    def __init__(self, orders: OrderRepository):
        self.orders = orders

    async def list_customers(self, search: str = "") -> List[CustomerSummary]:
        return filter_customers(aggregate_customers(await self.orders.get_all()), search)
