"""
Pydantic Models - Data Schemas for the storefront

Contains the models shared by services and repositories:
- Catalog products
- Checkout customer details and placed orders
- Product reviews
- Notification types and per-user notification preferences
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from storefront.services.money import multiply, to_decimal, to_float


DEFAULT_PAYMENT_METHOD = "Cash on Delivery (COD)"
DELIVERY_DAYS = 3


# ============================================================
# Enums
# ============================================================

class OrderStatus(str, Enum):
    """Order status lifecycle."""
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class NotificationType(str, Enum):
    """Email notification categories, each gated by a preference."""
    ORDER_CONFIRMATION = "order_confirmation"
    ORDER_UPDATE = "order_update"
    PRICE_DROP = "price_drop"
    NEW_PRODUCT = "new_product"
    MARKETING = "marketing"


# ============================================================
# Catalog
# ============================================================

class Product(BaseModel):
    """Catalog product row."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category: Optional[str] = None
    image_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("image_url", "image"))
    in_stock: bool = True
    rating: Optional[float] = None
    created_at: Optional[datetime] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)


# ============================================================
# Checkout / Orders
# ============================================================

REQUIRED_CUSTOMER_FIELDS = ("full_name", "phone_number", "delivery_address", "city", "province")


class CustomerInfo(BaseModel):
    """Delivery details entered at checkout."""
    full_name: str = ""
    phone_number: str = ""
    email: Optional[str] = None
    delivery_address: str = ""
    city: str = ""
    province: str = ""
    note: Optional[str] = None

    @field_validator("email", "note", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        # Optional fields are either a real value or None, never ""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    def missing_fields(self) -> List[str]:
        """Required fields left empty (whitespace counts as empty)."""
        return [name for name in REQUIRED_CUSTOMER_FIELDS if not getattr(self, name).strip()]

    def to_record(self) -> dict:
        return {
            "fullName": self.full_name,
            "phone": self.phone_number,
            "email": self.email,
            "address": self.delivery_address,
            "city": self.city,
            "province": self.province,
            "note": self.note,
        }

    @classmethod
    def from_record(cls, data: dict) -> "CustomerInfo":
        return cls(
            full_name=data.get("fullName", ""),
            phone_number=data.get("phone", data.get("phoneNumber", "")),
            email=data.get("email"),
            delivery_address=data.get("address", data.get("deliveryAddress", "")),
            city=data.get("city", ""),
            province=data.get("province", ""),
            note=data.get("note"),
        )


class OrderItem(BaseModel):
    """Line item copied from the cart when the order is placed."""
    id: int
    name: str
    price: Decimal
    quantity: int
    image: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)

    @property
    def line_total(self) -> Decimal:
        return multiply(self.price, self.quantity)


class OrderDetails(BaseModel):
    """A placed order."""
    order_id: str
    customer: CustomerInfo
    items: List[OrderItem]
    total: Decimal
    order_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    payment_method: str = DEFAULT_PAYMENT_METHOD
    status: OrderStatus = OrderStatus.PENDING

    @field_validator("total", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return to_decimal(v)

    @property
    def estimated_delivery(self) -> datetime:
        return self.order_date + timedelta(days=DELIVERY_DAYS)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_record(self) -> dict:
        """Row for the orders table."""
        return {
            "order_id": self.order_id,
            "customer_info": self.customer.to_record(),
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "price": to_float(item.price),
                    "quantity": item.quantity,
                    "image": item.image,
                }
                for item in self.items
            ],
            "total": to_float(self.total),
            "status": self.status.value,
            "payment_method": self.payment_method,
            "created_at": self.order_date.isoformat(),
        }

    @classmethod
    def from_record(cls, data: dict) -> "OrderDetails":
        """Build from an orders table row."""
        return cls(
            order_id=data["order_id"],
            customer=CustomerInfo.from_record(data.get("customer_info") or {}),
            items=[OrderItem(**item) for item in data.get("items") or []],
            total=data.get("total", 0),
            order_date=data.get("created_at") or datetime.now(timezone.utc),
            payment_method=data.get("payment_method") or DEFAULT_PAYMENT_METHOD,
            status=data.get("status") or OrderStatus.PENDING,
        )


# ============================================================
# Reviews
# ============================================================

class ReviewInput(BaseModel):
    """One product rating submitted for a delivered order."""
    product_id: int
    rating: int = Field(ge=0, le=5)  # 0 = not rated yet
    review_text: Optional[str] = None

    @field_validator("review_text", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


# ============================================================
# Notification preferences
# ============================================================

# camelCase keys as stored under raw_user_meta_data.preferences.notifications
_PREFERENCE_KEYS = {
    "email_notifications": "emailNotifications",
    "sms_notifications": "smsNotifications",
    "marketing_emails": "marketingEmails",
    "new_listing_alerts": "newListingAlerts",
    "message_notifications": "messageNotifications",
    "price_drop_alerts": "priceDropAlerts",
}


class NotificationPreferences(BaseModel):
    """Per-user notification toggles. Marketing is opt-in; everything else opt-out."""
    email_notifications: bool = True
    sms_notifications: bool = True
    marketing_emails: bool = False
    new_listing_alerts: bool = True
    message_notifications: bool = True
    price_drop_alerts: bool = True

    @classmethod
    def from_metadata(cls, metadata: Optional[dict]) -> "NotificationPreferences":
        """Read preferences out of user metadata; unset or non-boolean toggles keep their defaults."""
        saved: Any = ((metadata or {}).get("preferences") or {}).get("notifications") or {}
        values = {}
        for field_name, key in _PREFERENCE_KEYS.items():
            value = saved.get(key) if isinstance(saved, dict) else None
            if isinstance(value, bool):
                values[field_name] = value
        return cls(**values)

    def to_metadata(self, metadata: Optional[dict] = None) -> dict:
        """Merge these preferences into a copy of the user metadata."""
        merged = dict(metadata or {})
        preferences = dict(merged.get("preferences") or {})
        notifications = dict(preferences.get("notifications") or {})
        for field_name, key in _PREFERENCE_KEYS.items():
            notifications[key] = getattr(self, field_name)
        preferences["notifications"] = notifications
        merged["preferences"] = preferences
        return merged

    def allows(self, notification_type: NotificationType) -> bool:
        """Whether an email of this type may be sent."""
        if notification_type == NotificationType.PRICE_DROP:
            return self.price_drop_alerts
        if notification_type == NotificationType.NEW_PRODUCT:
            return self.new_listing_alerts
        if notification_type == NotificationType.MARKETING:
            return self.marketing_emails
        # order_confirmation, order_update
        return self.email_notifications
