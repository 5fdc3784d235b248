"""Tests for catalog browsing"""
from unittest.mock import AsyncMock, Mock

import pytest

from storefront.models import Product
from storefront.services.domains import CatalogService, filter_products, list_categories


@pytest.fixture
def products():
    return [
        Product(id=1, name="Ceramic Mug", description="Stoneware", price=10, category="Kitchen"),
        Product(id=2, name="Tea Towel", description="Linen, hand-woven", price=5, category="Kitchen"),
        Product(id=3, name="Bath Mat", description=None, price=20, category="Bath"),
        Product(id=4, name="Gift Card", price=25),
    ]


@pytest.mark.parametrize(
    "search,category,expected",
    [
        ("", "All", [1, 2, 3, 4]),
        ("MUG", "All", [1]),
        ("linen", "All", [2]),
        ("  towel ", "Kitchen", [2]),
        ("", "Bath", [3]),
        ("mug", "Bath", []),
    ],
)
def test_filter_products(products, search, category, expected):
    assert [p.id for p in filter_products(products, search, category)] == expected


def test_list_categories(products):
    assert list_categories(products) == ["Kitchen", "Bath"]


class TestCatalogService:
    @pytest.fixture
    def repos(self, products):
        product_repo = Mock()
        product_repo.get_all = AsyncMock(return_value=products)
        product_repo.get_by_id = AsyncMock(side_effect=lambda pid: next((p for p in products if p.id == pid), None))
        review_repo = Mock()
        review_repo.get_rating = AsyncMock(return_value={"average": 4.5, "count": 2})
        return product_repo, review_repo

    @pytest.mark.asyncio
    async def test_browse(self, repos):
        catalog = CatalogService(*repos)

        result = await catalog.browse(search="mat")

        assert [p.id for p in result] == [3]
        assert await catalog.categories() == ["Kitchen", "Bath"]

    @pytest.mark.asyncio
    async def test_details_with_rating(self, repos):
        details = await CatalogService(*repos).get_details(1)

        assert details.found is True
        assert details.product.name == "Ceramic Mug"
        assert details.rating == 4.5
        assert details.reviews_count == 2

    @pytest.mark.asyncio
    async def test_details_not_found(self, repos):
        details = await CatalogService(*repos).get_details(99)

        assert details.found is False
        assert details.product is None

    @pytest.mark.asyncio
    async def test_details_without_reviews(self, repos):
        details = await CatalogService(repos[0]).get_details(2)

        assert details.found is True
        assert details.reviews_count == 0
