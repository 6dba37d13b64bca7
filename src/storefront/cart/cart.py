"""Shopping Cart aggregate (CQRS): one cart per customer, emptied at checkout.

The cart records what the customer intends to buy and the unit price seen at
the time each line was last added. It does not hold stock: availability is
checked when items are added and again, authoritatively, when the order is
placed.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)
from storefront.domain import storefront

MAX_LINE_QUANTITY = 50


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_LINE_QUANTITY)
    price = Float(required=True, min_value=0.0)  # Unit price captured when added
    added_at = DateTime()

    @property
    def line_total(self):
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class Cart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(i.product_id) for i in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def subtotal(self):
        return round(sum(i.price * i.quantity for i in self.items), 2)

    def item_count(self):
        return sum(i.quantity for i in self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, price):
        """Add a product, or increase its line quantity if it is already in the cart.

        The line's unit price is replaced with `price`, the current catalogue
        price, on every add.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.find_item(product_id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if new_quantity > MAX_LINE_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity cannot be more than {MAX_LINE_QUANTITY}"]})

        now = datetime.now(UTC)
        if existing:
            existing.quantity = new_quantity
            existing.price = price
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    quantity=quantity,
                    price=price,
                    added_at=now,
                )
            )
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=new_quantity,
                price=price,
            )
        )

    def update_item_quantity(self, product_id, new_quantity):
        """Set a line's quantity. A quantity of 0 removes the line."""
        if new_quantity < 0 or new_quantity > MAX_LINE_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity must be between 0 and {MAX_LINE_QUANTITY}"]})

        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        if new_quantity == 0:
            self.remove_item(product_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self, reason="Cleared", order_id=None):
        """Drop every line. Used on request and after the cart becomes an order."""
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                reason=reason,
                order_id=str(order_id) if order_id else None,
            )
        )
