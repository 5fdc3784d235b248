"""
Repository Pattern for Database Operations

Provides clean separation of concerns:
- ProductRepository: Product catalog
- OrderRepository: Placed orders and their status
- ReviewRepository: Product reviews
- ProfileRepository: User profiles, notification preferences
"""
from .product_repo import ProductRepository
from .order_repo import OrderRepository
from .review_repo import ReviewRepository
from .profile_repo import ProfileRepository

__all__ = [
    "ProductRepository",
    "OrderRepository",
    "ReviewRepository",
    "ProfileRepository",
]
