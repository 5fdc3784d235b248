"""
Tests for the Cart Store
"""

import json
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from storefront.cart import CartLineItem, CartState, CartStore, MemoryStorage
from storefront.models import Product


def product(product_id, price="10.00", name=None, **extra):
    return {"product_id": product_id, "name": name or f"Product {product_id}", "unit_price": price, **extra}


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage):
    return CartStore(storage)


class TestCartLineItem:
    """Tests for CartLineItem dataclass."""

    def test_from_product_snapshots_display_fields(self):
        """Test snapshot of a product mapping."""
        item = CartLineItem.from_product(
            product(1, "19.99", description="Mug", category="Kitchen", image_url="mug.jpg")
        )

        assert item.product_id == 1
        assert item.quantity == 1
        assert item.unit_price == Decimal("19.99")
        assert item.description == "Mug"
        assert item.category == "Kitchen"
        assert item.image_url == "mug.jpg"

    def test_from_catalog_product_model(self, sample_product):
        """Test snapshot of a catalog Product (id/price/image spelling)."""
        item = CartLineItem.from_product(Product(**sample_product))

        assert item.product_id == 1
        assert item.name == "Ceramic Mug"
        assert item.unit_price == Decimal("10.0")
        assert item.image_url == "https://cdn.example.com/mug.jpg"

    def test_from_product_requires_identity_and_price(self):
        """Test missing fields are rejected."""
        with pytest.raises(ValueError):
            CartLineItem.from_product({"name": "No id"})

    def test_float_price_keeps_precision(self):
        """Test float prices go through str."""
        item = CartLineItem(product_id=1, name="Test", unit_price=0.1, quantity=3)

        assert item.line_total == Decimal("0.3")

    def test_unparseable_price_rejected(self):
        """Test a price that is not a number is an error, not zero."""
        with pytest.raises(ValueError):
            CartLineItem(product_id=1, name="Test", unit_price="garbage")

    def test_from_dict_rejects_zero_quantity(self):
        """Test stored quantity must be positive."""
        with pytest.raises(ValueError):
            CartLineItem.from_dict({"product_id": 1, "name": "x", "unit_price": "1", "quantity": 0})


class TestCartStore:
    """Tests for cart operations."""

    def test_new_cart_is_empty(self, cart):
        assert cart.items == ()
        assert cart.get_total_items() == 0
        assert cart.total_amount == 0
        assert cart.is_empty

    def test_add_same_product_twice_merges(self, cart):
        """Test adding a product twice gives one line item with quantity 2."""
        cart.add_item(product(1))
        cart.add_item(product(1))

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_readd_keeps_original_snapshot(self, cart):
        """Test the add-time price is kept when the catalog price changes."""
        cart.add_item(product(1, "10.00", name="Old name"))
        cart.add_item(product(1, "99.00", name="New name"))

        item = cart.get_item(1)
        assert item.unit_price == Decimal("10.00")
        assert item.name == "Old name"
        assert cart.total_amount == Decimal("20.00")

    @pytest.mark.parametrize("start,target", [(1, 5), (5, 1), (3, 3)])
    def test_update_quantity_sets_exactly(self, cart, start, target):
        """Test update is an absolute set, not an increment."""
        for _ in range(start):
            cart.add_item(product(1))

        cart.update_quantity(1, target)

        assert cart.get_item(1).quantity == target

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_update_quantity_to_zero_or_below_removes(self, cart, quantity):
        """Test zero/negative quantity deletes the line item."""
        cart.add_item(product(1))
        cart.add_item(product(2))

        cart.update_quantity(1, quantity)

        assert cart.get_item(1) is None
        assert [i.product_id for i in cart.items] == [2]
        assert cart.get_total_items() == 1

    def test_update_unknown_product_is_noop(self, cart, storage):
        """Test stale ids are tolerated and nothing is written."""
        cart.add_item(product(1))
        before = storage.get("cart")

        cart.update_quantity(42, 3)
        cart.update_quantity(42, 0)

        assert [i.product_id for i in cart.items] == [1]
        assert storage.get("cart") == before

    def test_remove_item(self, cart):
        cart.add_item(product(1))
        cart.add_item(product(2))

        cart.remove_item(1)
        cart.remove_item(99)  # absent: no-op

        assert [i.product_id for i in cart.items] == [2]

    def test_totals_track_every_mutation(self, cart):
        """Test totals always equal sums over the current items."""
        cart.add_item(product(1, "10.00"))
        cart.add_item(product(2, "2.50"))
        cart.add_item(product(3, "0.99"))
        cart.update_quantity(2, 4)
        cart.add_item(product(1, "10.00"))
        cart.remove_item(3)
        cart.update_quantity(1, 3)

        expected_amount = sum(i.unit_price * i.quantity for i in cart.items)
        expected_count = sum(i.quantity for i in cart.items)
        assert cart.total_amount == expected_amount == Decimal("40.00")
        assert cart.get_total_items() == expected_count == 7

    def test_clear_resets_fully(self, cart):
        """Test a cleared cart behaves like a fresh one."""
        cart.add_item(product(1))
        cart.add_item(product(1))
        cart.add_item(product(2))

        cart.clear_cart()

        assert cart.items == ()
        assert cart.get_total_items() == 0

        cart.add_item(product(1))
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 1

    def test_insertion_order_is_stable(self, cart):
        """Test A, B, A, C gives [A, B, C]."""
        cart.add_item(product("1"))
        cart.add_item(product(2))
        cart.add_item(product(1))
        cart.add_item(product(3))
        cart.update_quantity(2, 10)

        assert [i.product_id for i in cart.items] == [1, 2, 3]

    def test_items_view_is_read_only(self, cart, storage):
        """Test line items can only change through the store operations."""
        added = cart.add_item(product(1))

        with pytest.raises(AttributeError):
            cart.items.append(CartLineItem(product_id=2, name="x", unit_price=1))
        with pytest.raises(FrozenInstanceError):
            cart.items[0].quantity = 0
        with pytest.raises(FrozenInstanceError):
            added.unit_price = Decimal("0")
        with pytest.raises(FrozenInstanceError):
            cart.get_item(1).quantity = 5

        assert cart.get_item(1).quantity == 1
        assert json.loads(storage.get("cart"))[0]["quantity"] == 1

    def test_fractional_quantity_truncates_before_check(self, cart):
        """Test 0.5 counts as zero and removes the line item."""
        cart.add_item(product(1))
        cart.add_item(product(2))

        cart.update_quantity(1, 0.5)
        cart.update_quantity(2, 2.7)

        assert cart.get_item(1) is None
        assert cart.get_item(2).quantity == 2

    @pytest.mark.parametrize("price", ["abc", None, "NaN", "Infinity"])
    def test_add_rejects_unparseable_price(self, cart, price):
        """Test a product without a usable price never becomes a free line item."""
        with pytest.raises(ValueError):
            cart.add_item({"product_id": 1, "name": "Mug", "unit_price": price})

        assert cart.is_empty

    def test_example_scenario(self, cart):
        """Test the reference add/merge/remove walk-through."""
        cart.add_item({"product_id": 1, "name": "Mug", "unit_price": 10.00})
        cart.add_item({"product_id": 2, "name": "Towel", "unit_price": 5.00})
        cart.add_item({"product_id": 1, "name": "Mug", "unit_price": 10.00})

        assert [(i.product_id, i.quantity) for i in cart.items] == [(1, 2), (2, 1)]
        assert cart.get_total_items() == 3
        assert cart.total_amount == Decimal("25.00")

        cart.update_quantity(2, 0)

        assert [(i.product_id, i.quantity) for i in cart.items] == [(1, 2)]
        assert cart.total_amount == Decimal("20.00")

    def test_summary(self, cart):
        cart.add_item(product(1, "10.00"))
        cart.add_item(product(1, "10.00"))

        summary = cart.get_summary()

        assert summary["is_empty"] is False
        assert summary["total_items"] == 2
        assert summary["items"][0]["total"] == 20.0
        assert summary["total"] == 20.0

    def test_empty_summary(self, cart):
        assert cart.get_summary() == {"is_empty": True, "total_items": 0, "items": [], "total": 0.0}


class TestCartPersistence:
    """Tests for reading and writing the cart to session storage."""

    def test_every_mutation_writes_full_item_list(self, cart, storage):
        cart.add_item(product(1))
        assert len(json.loads(storage.get("cart"))) == 1

        cart.add_item(product(2))
        cart.update_quantity(1, 4)
        stored = json.loads(storage.get("cart"))
        assert [(r["product_id"], r["quantity"]) for r in stored] == [(1, 4), (2, 1)]

        cart.clear_cart()
        assert json.loads(storage.get("cart")) == []

    def test_reload_reproduces_items(self, storage):
        """Test a new store on the same storage sees the same cart (page reload)."""
        first = CartStore(storage)
        first.add_item(product(3, "1.25", category="Bath"))
        first.add_item(product(1, "10.00"))
        first.add_item(product(2, "7.10"))
        first.update_quantity(1, 5)
        first.add_item(product(3, "1.25"))

        reloaded = CartStore(storage)

        assert reloaded.items == first.items
        assert [i.product_id for i in reloaded.items] == [3, 1, 2]
        assert reloaded.total_amount == first.total_amount

    def test_custom_storage_key(self, storage):
        cart = CartStore(storage, storage_key="guest-cart")
        cart.add_item(product(1))

        assert storage.get("guest-cart") is not None
        assert storage.get("cart") is None

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "{\"product_id\": 1}",
            "[1, 2, 3]",
            "[{\"product_id\": 1}]",
            "[{\"product_id\": 1, \"name\": \"x\", \"unit_price\": \"1\", \"quantity\": -2}]",
            "[{\"product_id\": \"abc\", \"name\": \"x\", \"unit_price\": \"1\", \"quantity\": 1}]",
            "[{\"product_id\": 1, \"name\": \"x\", \"unit_price\": \"garbage\", \"quantity\": 2}]",
            "[{\"product_id\": 1, \"name\": \"x\", \"unit_price\": null, \"quantity\": 2}]",
            "[{\"product_id\": 1, \"name\": null, \"unit_price\": \"1\", \"quantity\": 2}]",
            "[{\"product_id\": 1, \"name\": 7, \"unit_price\": \"1\", \"quantity\": 2}]",
        ],
    )
    def test_malformed_data_starts_empty(self, raw):
        """Test unparseable or invalid stored data is discarded."""
        cart = CartStore(MemoryStorage({"cart": raw}))

        assert cart.items == ()
        assert cart.get_total_items() == 0

    def test_duplicate_stored_ids_are_merged(self):
        raw = json.dumps([
            {"product_id": 1, "name": "x", "unit_price": "2", "quantity": 1},
            {"product_id": 1, "name": "x", "unit_price": "2", "quantity": 2},
        ])
        cart = CartStore(MemoryStorage({"cart": raw}))

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_write_failure_keeps_memory_state(self):
        """Test a failing storage write does not reach the caller."""

        class FullStorage(MemoryStorage):
            def set(self, key, value):
                raise OSError("quota exceeded")

        cart = CartStore(FullStorage())
        cart.add_item(product(1))
        cart.add_item(product(1))

        assert cart.get_total_items() == 2

    def test_read_failure_starts_empty(self):
        class BrokenStorage(MemoryStorage):
            def get(self, key):
                raise OSError("storage unavailable")

        cart = CartStore(BrokenStorage())

        assert cart.is_empty


class TestCartState:
    """Tests for CartState serialization helpers."""

    def test_round_trip(self):
        state = CartState(items=[
            CartLineItem(product_id=1, name="A", unit_price="1.10", quantity=2),
            CartLineItem(product_id=2, name="B", unit_price="3", quantity=1, image_url="b.jpg"),
        ])

        restored = CartState.from_list(json.loads(json.dumps(state.to_list())))

        assert restored.items == state.items
        assert restored.total_amount == Decimal("5.20")
