"""Cart package: models, storage adapters, and the cart store."""
from .models import CartLineItem, CartState
from .storage import CartStorage, FileStorage, MemoryStorage, RedisStorage
from .service import CartStore, build_storage, get_cart_store

__all__ = [
    "CartLineItem",
    "CartState",
    "CartStorage",
    "MemoryStorage",
    "FileStorage",
    "RedisStorage",
    "CartStore",
    "build_storage",
    "get_cart_store",
]
