"""
Catalog Domain Service

Product listing, search/category filtering and product detail lookup.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from storefront.errors import ERROR_PRODUCT_NOT_FOUND
from storefront.logging import get_logger
from storefront.models import Product
from storefront.services.repositories import ProductRepository, ReviewRepository

logger = get_logger(__name__)

ALL_CATEGORIES = "All"


def filter_products(
    products: Iterable[Product],
    search: str = "",
    category: str = ALL_CATEGORIES,
) -> List[Product]:
    """
    Products matching a search term and category.

    The search term is a case-insensitive substring of the name or the
    description; category "All" matches everything. Input order is kept.
    """
    term = (search or "").strip().lower()
    result = []
    for product in products:
        matches_search = (
            not term
            or term in product.name.lower()
            or term in (product.description or "").lower()
        )
        matches_category = category == ALL_CATEGORIES or product.category == category
        if matches_search and matches_category:
            result.append(product)
    return result


def list_categories(products: Iterable[Product]) -> List[str]:
    """Distinct categories in first-seen order."""
    seen = []
    for product in products:
        if product.category and product.category not in seen:
            seen.append(product.category)
    return seen


@dataclass
class ProductDetails:
    """Product with review stats for the detail page."""

    found: bool
    product: Optional[Product] = None
    rating: float = 0.0
    reviews_count: int = 0


class CatalogService:
    """Catalog domain service."""

    def __init__(self, products: ProductRepository, reviews: Optional[ReviewRepository] = None):
        self.products = products
        self.reviews = reviews

    async def browse(self, search: str = "", category: str = ALL_CATEGORIES) -> List[Product]:
        """Filtered catalog listing."""
        products = await self.products.get_all()
        return filter_products(products, search=search, category=category)

    async def categories(self) -> List[str]:
        return list_categories(await self.products.get_all())

    async def get_details(self, product_id: int) -> ProductDetails:
        product = await self.products.get_by_id(product_id)
        if not product:
            logger.info(f"{ERROR_PRODUCT_NOT_FOUND}: {product_id}")
            return ProductDetails(found=False)

        if self.reviews is None:
            return ProductDetails(found=True, product=product)

        rating = await self.reviews.get_rating(product.id)
        return ProductDetails(
            found=True,
            product=product,
            rating=rating.get("average", 0.0),
            reviews_count=rating.get("count", 0),
        )
