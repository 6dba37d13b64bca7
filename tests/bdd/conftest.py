"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from storefront.cart.cart import Cart
from storefront.order.fulfillment import UpdateOrderStatus
from storefront.order.order import Order
from storefront.payments import get_gateway
from storefront.product.product import Product


# ---------------------------------------------------------------------------
# Scenario state
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Product name -> product id, for the products a scenario created."""
    return {}


@pytest.fixture()
def error():
    """Container for a captured validation error."""
    return {"exc": None}


@pytest.fixture()
def placed():
    return {"order_id": None}


def _product(catalogue, name):
    return current_domain.repository_for(Product).get(catalogue[name])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {quantity:d} in stock'))
def _(catalogue, add_product, name, price, quantity):
    catalogue[name] = str(add_product(name=name, price=price, quantity=quantity).id)


@given(parsers.cfparse('the customer has {quantity:d} "{name}" in the cart'))
def _(catalogue, fill_cart, name, quantity):
    fill_cart((_product(catalogue, name), quantity))


@given(parsers.cfparse('another shopper buys {quantity:d} "{name}"'))
def _(catalogue, fill_cart, place_order, name, quantity):
    fill_cart((_product(catalogue, name), quantity), customer="cust-other")
    place_order(customer="cust-other")


@given("the payment gateway declines payments")
def _():
    get_gateway().configure(should_succeed=False)


@given(parsers.cfparse('the customer has placed an order for {quantity:d} "{name}"'))
def _(catalogue, fill_cart, place_order, placed, name, quantity):
    fill_cart((_product(catalogue, name), quantity))
    placed["order_id"] = place_order()


@given(parsers.cfparse('the order has moved to "{status}"'))
def _(placed, status):
    current_domain.process(UpdateOrderStatus(order_id=placed["order_id"], status=status), asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('an admin sets the order status to "{status}"'))
def _(placed, status):
    current_domain.process(UpdateOrderStatus(order_id=placed["order_id"], status=status), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {quantity:d} in stock'))
def _(catalogue, name, quantity):
    assert _product(catalogue, name).quantity == quantity


@then(parsers.cfparse('the order is "{status}"'))
def _(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then(parsers.cfparse('the order was cancelled by "{actor}"'))
def _(placed, actor):
    assert current_domain.repository_for(Order).get(placed["order_id"]).cancelled_by == actor


@then(parsers.cfparse('{action} is rejected with "{message}"'))
def _(error, action, message):
    exc = error["exc"]
    assert isinstance(exc, ValidationError)
    assert message in [m for messages in exc.messages.values() for m in messages]


@then("the cart is empty")
def _(customer_id):
    assert current_domain.repository_for(Cart).find_by_customer(customer_id).items == []
