"""
Common Error Constants and Exceptions

Centralized error messages to avoid string duplication.
"""

# Cart / checkout errors
ERROR_CART_EMPTY = "Cart is empty"
ERROR_MISSING_FIELDS = "Please fill in all required fields"
ERROR_ORDER_FAILED = "There was an error processing your order. Please try again."

# Order errors
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_ORDER_INVALID_STATUS = "Invalid order status"
ERROR_ORDER_NOT_DELIVERED = "You can only review orders that have been delivered."

# Review errors
ERROR_REVIEW_INCOMPLETE = "Please provide a rating for all products."
ERROR_REVIEW_FAILED = "Failed to submit reviews. Please try again."

# Notification errors
ERROR_NOTIFICATION_FAILED = "Failed to send notification"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"


class StorefrontError(Exception):
    """Base class for storefront domain errors."""


class CheckoutError(StorefrontError):
    """Order could not be placed."""


class OrderStatusError(StorefrontError):
    """Order status change rejected."""


class ReviewError(StorefrontError):
    """Reviews could not be accepted."""


class NotificationError(StorefrontError):
    """Email notification delivery failed."""
