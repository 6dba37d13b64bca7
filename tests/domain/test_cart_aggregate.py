"""Tests for the Cart aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.cart.cart import Cart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved


def _make_cart():
    return Cart.create(customer_id="cust-001")


class TestAddItem:
    def test_add_item(self):
        cart = _make_cart()
        cart.add_item("prod-001", 2, 10.0)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].price == 10.0

    def test_add_same_product_merges_line(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart.add_item("prod-001", 2, 10.0)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_re_adding_captures_current_price(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart.add_item("prod-001", 1, 8.5)
        assert cart.items[0].price == 8.5

    def test_line_cannot_exceed_fifty(self):
        cart = _make_cart()
        cart.add_item("prod-001", 45, 1.0)
        with pytest.raises(ValidationError):
            cart.add_item("prod-001", 6, 1.0)
        assert cart.items[0].quantity == 45

    def test_raises_item_added(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart.add_item("prod-001", 2, 10.0)
        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(events) == 2
        assert events[-1].quantity == 2
        assert events[-1].line_quantity == 3


class TestUpdateQuantity:
    def test_update_quantity(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart.update_item_quantity("prod-001", 4)
        assert cart.items[0].quantity == 4

    def test_update_raises_event(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart._events.clear()
        cart.update_item_quantity("prod-001", 3)
        event = cart._events[0]
        assert isinstance(event, CartItemQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 3

    def test_zero_removes_line(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart.update_item_quantity("prod-001", 0)
        assert len(cart.items) == 0
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_unknown_item(self):
        cart = _make_cart()
        with pytest.raises(ValidationError) as exc:
            cart.update_item_quantity("prod-404", 2)
        assert exc.value.messages["product_id"] == ["Item not found in cart"]

    def test_out_of_range(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        with pytest.raises(ValidationError):
            cart.update_item_quantity("prod-001", 51)


class TestRemoveAndClear:
    def test_remove_item(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart.add_item("prod-002", 1, 5.0)
        cart.remove_item("prod-001")
        assert [str(i.product_id) for i in cart.items] == ["prod-002"]

    def test_remove_unknown_item(self):
        with pytest.raises(ValidationError):
            _make_cart().remove_item("prod-404")

    def test_clear(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, 10.0)
        cart.add_item("prod-002", 1, 5.0)
        cart.clear(reason="Checked out", order_id="ord-001")
        assert len(cart.items) == 0
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.reason == "Checked out"
        assert event.order_id == "ord-001"


class TestTotals:
    def test_subtotal_uses_captured_prices(self):
        cart = _make_cart()
        cart.add_item("prod-001", 2, 10.0)
        cart.add_item("prod-002", 3, 2.5)
        assert cart.subtotal() == 27.5

    def test_item_count(self):
        cart = _make_cart()
        cart.add_item("prod-001", 2, 10.0)
        cart.add_item("prod-002", 3, 2.5)
        assert cart.item_count() == 5

    def test_empty_cart(self):
        cart = _make_cart()
        assert cart.subtotal() == 0
        assert cart.item_count() == 0
