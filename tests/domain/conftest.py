import pytest

from storefront.order.order import Order

ITEMS = [
    {
        "product_id": "prod-001",
        "name": "USB-C Cable",
        "sku": "ACME-USBC",
        "price": 10.0,
        "quantity": 2,
        "image": "",
    }
]

PRICING = {"subtotal": 20.0, "tax": 1.6, "shipping": 15.0, "total": 36.6, "currency": "USD"}


@pytest.fixture()
def make_order(address):
    def _make(**overrides):
        data = {
            "customer_id": "cust-001",
            "items_data": ITEMS,
            "shipping_address": address,
            "pricing": PRICING,
            "payment_method": "credit_card",
            "payment_intent_id": "pi_123",
        }
        data.update(overrides)
        return Order.place(**data)

    return _make
