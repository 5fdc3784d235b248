"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional

from storefront.services.money import multiply


def _get(product: Any, *names: str, default: Any = None) -> Any:
    """Read the first present attribute/key out of a mapping or object."""
    for name in names:
        if isinstance(product, Mapping):
            if name in product and product[name] is not None:
                return product[name]
        else:
            value = getattr(product, name, None)
            if value is not None:
                return value
    return default


def parse_price(value: Any) -> Decimal:
    """Strict Decimal price. Raises ValueError on anything that is not a finite number."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"invalid price: {value!r}")
    try:
        # Floats go through str so 19.99 stays 19.99
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"invalid price: {value!r}") from e
    if not price.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    return price


@dataclass(frozen=True)
class CartLineItem:
    """Single product in the cart with its add-time snapshot. Immutable; the store swaps in updated copies."""
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int = 1
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "product_id", int(self.product_id))
        object.__setattr__(self, "unit_price", parse_price(self.unit_price))
        object.__setattr__(self, "quantity", int(self.quantity))

    def with_quantity(self, quantity: int) -> "CartLineItem":
        return replace(self, quantity=quantity)

    @property
    def line_total(self) -> Decimal:
        """unit_price * quantity."""
        return multiply(self.unit_price, self.quantity)

    @classmethod
    def from_product(cls, product: Any) -> "CartLineItem":
        """
        Snapshot a catalog product into a new line item with quantity 1.

        Accepts a mapping or an object carrying product_id/name/unit_price;
        catalog rows spelled id/price/image are accepted too.
        """
        product_id = _get(product, "product_id", "id")
        name = _get(product, "name")
        unit_price = _get(product, "unit_price", "price")
        if product_id is None or name is None or unit_price is None:
            raise ValueError("product must provide product_id, name and unit_price")
        return cls(
            product_id=product_id,
            name=name,
            unit_price=unit_price,
            quantity=1,
            description=_get(product, "description"),
            category=_get(product, "category"),
            image_url=_get(product, "image_url", "image"),
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-compatible record."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "image_url": self.image_url,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        """Create from a stored record. Raises on missing or invalid fields."""
        quantity = int(data["quantity"])
        if quantity < 1:
            raise ValueError(f"stored quantity must be >= 1, got {quantity}")
        name = data["name"]
        if not isinstance(name, str):
            raise TypeError(f"stored name must be a string, got {type(name).__name__}")
        return cls(
            product_id=int(data["product_id"]),
            name=name,
            unit_price=parse_price(data["unit_price"]),
            quantity=quantity,
            description=data.get("description"),
            category=data.get("category"),
            image_url=data.get("image_url"),
        )


@dataclass
class CartState:
    """Ordered line items; totals are derived on every read."""
    items: List[CartLineItem] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        """Sum of quantities."""
        return sum(item.quantity for item in self.items)

    @property
    def total_amount(self) -> Decimal:
        """Sum of unit_price * quantity."""
        return sum((item.line_total for item in self.items), Decimal("0"))

    def find(self, product_id: int) -> Optional[CartLineItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    def put(self, item: CartLineItem) -> None:
        """Replace the line item for item.product_id in place, or append it."""
        for index, current in enumerate(self.items):
            if current.product_id == item.product_id:
                self.items[index] = item
                return
        self.items.append(item)

    def remove(self, product_id: int) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def to_list(self) -> list:
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "CartState":
        """
        Rebuild state from stored records.

        Raises TypeError/KeyError/ValueError on structurally invalid data.
        Duplicate product ids are merged so the one-item-per-product rule holds.
        """
        if not isinstance(data, list):
            raise TypeError(f"stored cart must be a list, got {type(data).__name__}")
        state = cls()
        for record in data:
            if not isinstance(record, dict):
                raise TypeError(f"stored line item must be an object, got {type(record).__name__}")
            item = CartLineItem.from_dict(record)
            existing = state.find(item.product_id)
            if existing:
                item = existing.with_quantity(existing.quantity + item.quantity)
            state.put(item)
        return state
