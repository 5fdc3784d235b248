"""
Storefront Core Module

This package contains the storefront building blocks:
- cart: session cart store and its storage adapters
- db: hosted backend clients (Supabase + Upstash Redis)
- models: Pydantic schemas for catalog, orders, reviews, preferences
- services: checkout, email, notifications, catalog and order domains

Note: Imports are lazy so that importing the cart alone never requires
backend credentials.
"""

__all__ = [
    "get_supabase",
    "get_redis",
    "CartStore",
    "get_cart_store",
]


def __getattr__(name):
    """Lazy attribute access for clean module loading."""
    if name == "get_supabase":
        from storefront.db import get_supabase
        return get_supabase
    elif name == "get_redis":
        from storefront.db import get_redis
        return get_redis
    elif name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "get_cart_store":
        from storefront.cart import get_cart_store
        return get_cart_store
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
