"""
Tests for cart models and the snapshot format
"""

import json
from decimal import Decimal

import pytest

from storefront.cart import Cart, CartLineItem
from storefront.errors import MalformedSnapshot


class TestCartLineItem:
    """Tests for CartLineItem dataclass."""

    def test_float_price_kept_exact(self):
        """Test a float price becomes the Decimal it reads as."""
        item = CartLineItem(product_id="p1", name="Lamp", unit_price=19.99, quantity=1)

        assert item.unit_price == Decimal("19.99")

    def test_line_total(self):
        item = CartLineItem(product_id="p1", name="Lamp", unit_price=Decimal("19.99"), quantity=3)

        assert item.line_total == Decimal("59.97")

    def test_to_dict_uses_persisted_field_names(self):
        item = CartLineItem(
            product_id="p1",
            name="Lamp",
            unit_price=Decimal("10.50"),
            quantity=2,
            image_url="https://cdn.example/lamp.jpg",
        )

        assert item.to_dict() == {
            "id": "p1",
            "name": "Lamp",
            "price": 10.5,
            "quantity": 2,
            "image_url": "https://cdn.example/lamp.jpg",
        }

    def test_to_dict_omits_missing_image(self):
        item = CartLineItem(product_id="p1", name="Lamp", unit_price=5, quantity=1)

        assert "image_url" not in item.to_dict()

    def test_from_dict(self):
        item = CartLineItem.from_dict({"id": "p1", "name": "Lamp", "price": 5, "quantity": 2})

        assert item.product_id == "p1"
        assert item.unit_price == Decimal("5")
        assert item.quantity == 2
        assert item.image_url is None

    @pytest.mark.parametrize("data", [
        {"name": "Lamp", "price": 5, "quantity": 1},
        {"id": "", "name": "Lamp", "price": 5, "quantity": 1},
        {"id": "p1", "price": 5, "quantity": 1},
        {"id": "p1", "name": "Lamp", "price": "5", "quantity": 1},
        {"id": "p1", "name": "Lamp", "price": -1, "quantity": 1},
        {"id": "p1", "name": "Lamp", "price": True, "quantity": 1},
        {"id": "p1", "name": "Lamp", "price": 5, "quantity": 0},
        {"id": "p1", "name": "Lamp", "price": 5, "quantity": 1.5},
        {"id": "p1", "name": "Lamp", "price": 5, "quantity": True},
        {"id": "p1", "name": "Lamp", "price": 5, "quantity": 1, "image_url": 7},
        ["p1", "Lamp", 5, 1],
    ])
    def test_from_dict_rejects_bad_items(self, data):
        with pytest.raises(MalformedSnapshot):
            CartLineItem.from_dict(data)


class TestCart:
    """Tests for Cart dataclass."""

    def test_create_empty_cart(self):
        cart = Cart()

        assert cart.is_empty
        assert cart.count == 0
        assert cart.total == Decimal("0")

    def test_cart_totals(self):
        cart = Cart(items=[
            CartLineItem(product_id="p1", name="A", unit_price=5, quantity=1),
            CartLineItem(product_id="p2", name="B", unit_price=7, quantity=2),
        ])

        assert cart.count == 3
        assert cart.total == Decimal("19")

    def test_find(self):
        cart = Cart(items=[CartLineItem(product_id="p1", name="A", unit_price=5, quantity=1)])

        assert cart.find("p1").name == "A"
        assert cart.find("missing") is None

    def test_snapshot_is_versioned(self):
        cart = Cart(items=[CartLineItem(product_id="p1", name="A", unit_price=5, quantity=1)])

        data = json.loads(cart.to_snapshot())

        assert data["version"] == 1
        assert data["items"] == [{"id": "p1", "name": "A", "price": 5.0, "quantity": 1}]

    def test_snapshot_round_trip(self):
        cart = Cart(items=[
            CartLineItem(product_id="p2", name="B", unit_price=Decimal("0.10"), quantity=3, image_url="b.jpg"),
            CartLineItem(product_id="p1", name="A", unit_price=Decimal("19.99"), quantity=1),
        ])

        restored = Cart.from_snapshot(cart.to_snapshot())

        assert restored == cart
        assert [item.product_id for item in restored.items] == ["p2", "p1"]

    def test_snapshot_writes_exact_prices(self):
        """Test prices are stored as exact JSON numbers, not floats."""
        cart = Cart(items=[
            CartLineItem(product_id="p1", name="A", unit_price=Decimal("12345678901234567.89"), quantity=1),
            CartLineItem(product_id="p2", name="B", unit_price=Decimal("0.10"), quantity=1),
        ])

        raw = cart.to_snapshot()

        assert '"price":12345678901234567.89' in raw
        assert '"price":0.10' in raw
        assert Cart.from_snapshot(raw).items[0].unit_price == Decimal("12345678901234567.89")

    def test_legacy_array_snapshot(self):
        """Test snapshots written as a bare array still load."""
        raw = '[{"id":"p1","name":"Lamp","price":19.99,"quantity":2,"image_url":"lamp.jpg"}]'

        cart = Cart.from_snapshot(raw)

        assert len(cart.items) == 1
        assert cart.items[0].unit_price == Decimal("19.99")
        assert cart.items[0].image_url == "lamp.jpg"

    def test_empty_legacy_array(self):
        assert Cart.from_snapshot("[]").is_empty

    @pytest.mark.parametrize("raw", [
        "",
        "not json",
        "{",
        "null",
        "42",
        '"cart"',
        '{"items": []}',
        '{"version": 2, "items": []}',
        '{"version": 1, "items": {}}',
        '[{"id":"p1","name":"A","price":NaN,"quantity":1}]',
        '[{"id":"p1","name":"A","price":1,"quantity":1},{"id":"p1","name":"A","price":1,"quantity":2}]',
        '[{"id":"p1","name":"A","price":1,"quantity":-3}]',
    ])
    def test_malformed_snapshots(self, raw):
        with pytest.raises(MalformedSnapshot):
            Cart.from_snapshot(raw)
