"""Domain services wrapping repositories."""
from .catalog import CatalogService, filter_products, list_categories
from .customers import CustomersDomain, aggregate_customers, customer_stats, filter_customers
from .orders import OrdersDomain, dashboard_stats, filter_orders, parse_status
from .reviews import ReviewsDomain

__all__ = [
    "CatalogService",
    "CustomersDomain",
    "OrdersDomain",
    "ReviewsDomain",
    "filter_products",
    "list_categories",
    "aggregate_customers",
    "customer_stats",
    "filter_customers",
    "dashboard_stats",
    "filter_orders",
    "parse_status",
]
