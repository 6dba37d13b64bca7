"""Tests for the Order aggregate: placement snapshot and addresses."""

import json

import pytest
from protean.exceptions import ValidationError

from storefront.order.events import OrderPlaced
from storefront.order.order import Address, OrderStatus, PaymentStatus


class TestPlacement:
    def test_new_order_is_pending_and_paid(self, make_order):
        order = make_order()
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.COMPLETED.value

    def test_order_number_format(self, make_order):
        order = make_order()
        assert order.order_number.startswith("ORD-")
        assert len(order.order_number.split("-")) == 3

    def test_items_are_snapshotted(self, make_order):
        order = make_order()
        assert len(order.items) == 1
        item = order.items[0]
        assert item.name == "USB-C Cable"
        assert item.sku == "ACME-USBC"
        assert item.line_total == 20.0

    def test_pricing_is_locked(self, make_order):
        order = make_order()
        assert order.pricing.total == 36.6
        assert order.pricing.shipping == 15.0

    def test_billing_defaults_to_shipping(self, make_order):
        order = make_order()
        assert order.billing_address.street == order.shipping_address.street

    def test_separate_billing_address(self, make_order, address):
        order = make_order(billing_address={**address, "street": "9 Elm St"})
        assert order.billing_address.street == "9 Elm St"
        assert order.shipping_address.street == "1 Main St"

    def test_raises_order_placed(self, make_order):
        order = make_order()
        events = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(events) == 1
        event = events[0]
        assert event.total == 36.6
        assert json.loads(event.items)[0]["quantity"] == 2

    def test_order_needs_items(self, make_order):
        with pytest.raises(ValidationError):
            make_order(items_data=[])

    def test_invalid_payment_method(self, make_order):
        with pytest.raises(ValidationError):
            make_order(payment_method="cash")


class TestAddress:
    def test_valid_address(self, address):
        assert Address(**address).city == "Springfield"

    def test_malformed_email(self, address):
        with pytest.raises(ValidationError):
            Address(**{**address, "email": "not-an-email"})

    def test_missing_field(self, address):
        data = dict(address)
        del data["zip_code"]
        with pytest.raises(ValidationError):
            Address(**data)


class TestOwnership:
    def test_belongs_to(self, make_order):
        order = make_order()
        assert order.belongs_to("cust-001") is True
        assert order.belongs_to("cust-002") is False

    def test_contains_product(self, make_order):
        order = make_order()
        assert order.contains_product("prod-001") is True
        assert order.contains_product("prod-404") is False
