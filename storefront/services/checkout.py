"""
Checkout Service

Turns the session cart into a placed order:
validate -> snapshot items -> store order -> clear cart -> confirmation email.
"""
from datetime import datetime, timezone
from typing import Optional

from storefront.cart import CartStore
from storefront.errors import (
    ERROR_CART_EMPTY,
    ERROR_MISSING_FIELDS,
    ERROR_ORDER_FAILED,
    CheckoutError,
)
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import CustomerInfo, OrderDetails, OrderItem
from storefront.services.email import EmailService
from storefront.services.money import format_money
from storefront.services.repositories import OrderRepository

logger = get_logger(__name__)


def generate_order_id(now: Optional[datetime] = None) -> str:
    """ORD-<epoch milliseconds>."""
    now = now or datetime.now(timezone.utc)
    return f"ORD-{int(now.timestamp() * 1000)}"


class CheckoutService:
    """Places cash-on-delivery orders from a cart."""

    def __init__(
        self,
        cart: CartStore,
        orders: OrderRepository,
        email: Optional[EmailService] = None,
    ):
        self.cart = cart
        self.orders = orders
        self.email = email

    def build_order(self, customer: CustomerInfo, now: Optional[datetime] = None) -> OrderDetails:
        """Validate the checkout and snapshot the cart into an order (nothing is stored)."""
        if self.cart.is_empty:
            raise CheckoutError(ERROR_CART_EMPTY)

        missing = customer.missing_fields()
        if missing:
            raise CheckoutError(f"{ERROR_MISSING_FIELDS}: {', '.join(missing)}")

        now = now or datetime.now(timezone.utc)
        return OrderDetails(
            order_id=generate_order_id(now),
            customer=customer,
            items=[
                OrderItem(
                    id=item.product_id,
                    name=item.name,
                    price=item.unit_price,
                    quantity=item.quantity,
                    image=item.image_url,
                )
                for item in self.cart.items
            ],
            total=self.cart.total_amount,
            order_date=now,
        )

    async def place_order(self, customer: CustomerInfo) -> OrderDetails:
        """
        Place an order for everything in the cart.

        The cart is cleared only after the order is stored. A failed
        confirmation email is logged and does not fail the order.

        Raises:
            CheckoutError: empty cart, missing customer fields, or the order could not be stored
        """
        order = self.build_order(customer)

        try:
            order = await self.orders.create(order)
        except Exception as e:
            logger.error(f"Failed to store order {order.order_id}: {e}")
            raise CheckoutError(ERROR_ORDER_FAILED) from e

        self.cart.clear_cart()
        logger.info(
            f"Order {order.order_id} placed for {sanitize_string_for_logging(order.customer.full_name)}: "
            f"{order.item_count} items, {format_money(order.total)}"
        )

        if self.email is not None:
            try:
                sent = await self.email.send_order_confirmation(order)
                if not sent:
                    logger.info(f"Order confirmation email not sent for {order.order_id}")
            except Exception as e:
                logger.error(f"Order confirmation email failed for {order.order_id}: {e}")

        return order
