"""Checkout: turns the customer's cart into a paid order.

Everything is validated before anything is written. The order, the stock
decrements and the emptied cart are then persisted by the same Unit of Work,
so a failure at any point leaves all of them untouched. Products carry their
aggregate version; a concurrent checkout that changed the same product first
makes this one fail on commit instead of overselling.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.order.order import Order, PaymentMethod
from storefront.order.pricing import price_cart
from storefront.payments import get_gateway
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    shipping_address = Text(required=True)  # JSON: Address fields
    billing_address = Text()  # JSON: Address fields, defaults to shipping
    payment_method = String(required=True, choices=PaymentMethod)
    payment_intent_id = String(required=True, max_length=255)


def _unavailable(name):
    return ValidationError({"items": [f"{name} is no longer available in the requested quantity"]})


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.find_by_customer(command.customer_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        # 1. Every line must still be purchasable. Nothing is written yet.
        products = {}
        for item in cart.items:
            try:
                product = product_repo.get(item.product_id)
            except ObjectNotFoundError:
                raise _unavailable("A product in your cart") from None
            if not product.can_fulfil(item.quantity):
                raise _unavailable(product.name)
            products[str(item.product_id)] = product

        # 2. Payment must have been collected for exactly this amount
        pricing = price_cart(cart)
        intent = get_gateway().retrieve_payment_intent(command.payment_intent_id)
        if intent is None or not intent.succeeded:
            raise ValidationError({"payment_intent_id": ["Payment not completed"]})
        if round(intent.amount, 2) != pricing["total"]:
            raise ValidationError({"payment_intent_id": ["Payment amount does not match the order total"]})

        # 3. Snapshot the order from captured cart prices
        order = Order.place(
            customer_id=command.customer_id,
            items_data=[
                {
                    "product_id": str(item.product_id),
                    "name": products[str(item.product_id)].name,
                    "sku": products[str(item.product_id)].sku,
                    "price": item.price,
                    "quantity": item.quantity,
                    "image": products[str(item.product_id)].primary_image_url(),
                }
                for item in cart.items
            ],
            shipping_address=json.loads(command.shipping_address),
            billing_address=json.loads(command.billing_address) if command.billing_address else None,
            pricing=pricing,
            payment_method=command.payment_method,
            payment_intent_id=command.payment_intent_id,
        )

        # 4. Take the stock
        for item in cart.items:
            product = products[str(item.product_id)]
            product.reserve_stock(item.quantity, order.id)
            product_repo.add(product)

        # 5. Empty the cart
        cart.clear(reason="Checked out", order_id=order.id)

        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(command.customer_id),
            total=pricing["total"],
        )
        return str(order.id)
