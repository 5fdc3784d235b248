"""Cart store: the in-session record of what the shopper intends to buy."""
import json
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from storefront.config import (
    CartConfig,
    DEFAULT_CART_STORAGE_KEY,
    STORAGE_FILE,
    STORAGE_REDIS,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.money import round_money, to_float
from .models import CartLineItem, CartState
from .storage import CartStorage, FileStorage, MemoryStorage, RedisStorage

logger = get_logger(__name__)


class CartStore:
    """
    Owns the cart line items and keeps them in session storage.

    - One line item per product; re-adding increments quantity
    - Items keep the order in which products were first added
    - Totals are recomputed on every read
    - Stored once after every mutation, read once at construction

    Storage problems never reach the caller: unreadable data starts an
    empty cart and failed writes leave the in-memory cart authoritative.
    """

    def __init__(self, storage: CartStorage, storage_key: str = DEFAULT_CART_STORAGE_KEY):
        self.storage = storage
        self.storage_key = storage_key
        self._state = self._load()

    # ==================== PERSISTENCE ====================

    def _load(self) -> CartState:
        try:
            raw = self.storage.get(self.storage_key)
        except Exception as e:
            logger.warning(f"Failed to read cart '{self.storage_key}' from storage: {e}")
            return CartState()

        if not raw:
            return CartState()

        try:
            return CartState.from_list(json.loads(raw))
        except (json.JSONDecodeError, InvalidOperation, KeyError, TypeError, ValueError) as e:
            # Corrupted data - start over with an empty cart
            logger.warning(f"Discarding malformed cart data under '{self.storage_key}': {e}")
            return CartState()

    def _persist(self) -> None:
        try:
            self.storage.set(self.storage_key, json.dumps(self._state.to_list()))
        except Exception as e:
            logger.warning(f"Failed to write cart '{self.storage_key}' to storage: {e}")

    # ==================== COMMANDS ====================

    def add_item(self, product: Any) -> CartLineItem:
        """Add one unit of product, merging into an existing line item."""
        new_item = CartLineItem.from_product(product)
        existing = self._state.find(new_item.product_id)

        item = existing.with_quantity(existing.quantity + 1) if existing else new_item
        self._state.put(item)

        self._persist()
        logger.debug(f"Cart add: product {sanitize_id_for_logging(item.product_id)} qty={item.quantity}")
        return item

    def update_quantity(self, product_id: int, new_quantity: int) -> None:
        """Set a line item's quantity exactly; zero or less removes it. Unknown ids are ignored."""
        item = self._state.find(product_id)
        if item is None:
            return

        new_quantity = int(new_quantity)
        if new_quantity <= 0:
            self._state.remove(product_id)
        else:
            self._state.put(item.with_quantity(new_quantity))

        self._persist()

    def remove_item(self, product_id: int) -> None:
        """Remove the line item for product_id if present."""
        item = self._state.find(product_id)
        if item is None:
            return

        self._state.remove(product_id)
        self._persist()

    def clear_cart(self) -> None:
        """Empty the cart (used after an order is placed)."""
        self._state.items.clear()
        self._persist()

    # ==================== QUERIES ====================

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self._state.items)

    def get_item(self, product_id: int) -> Optional[CartLineItem]:
        return self._state.find(product_id)

    def get_total_items(self) -> int:
        return self._state.total_items

    @property
    def total_amount(self) -> Decimal:
        return self._state.total_amount

    @property
    def is_empty(self) -> bool:
        return not self._state.items

    def get_summary(self) -> dict:
        """Cart snapshot for presentation layers."""
        if self.is_empty:
            return {
                "is_empty": True,
                "total_items": 0,
                "items": [],
                "total": 0.0,
            }

        return {
            "is_empty": False,
            "total_items": self.get_total_items(),
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "image_url": item.image_url,
                    "quantity": item.quantity,
                    "unit_price": to_float(item.unit_price),
                    "total": to_float(round_money(item.line_total)),
                }
                for item in self._state.items
            ],
            "total": to_float(round_money(self.total_amount)),
        }


def build_storage(config: CartConfig) -> CartStorage:
    """Create the storage adapter selected by configuration."""
    if config.storage == STORAGE_FILE:
        return FileStorage(config.storage_dir)
    if config.storage == STORAGE_REDIS:
        return RedisStorage(ttl=config.ttl)
    return MemoryStorage()


def get_cart_store(config: Optional[CartConfig] = None) -> CartStore:
    """Build a cart store from configuration (CART_STORAGE and friends)."""
    config = config or CartConfig.from_env()
    return CartStore(build_storage(config), storage_key=config.storage_key)
