"""Order aggregate (CQRS): the immutable record of a checkout.

An order snapshots everything it needs at placement time: line names, SKUs,
unit prices, addresses and pricing. Later catalogue edits never change it.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING, PROCESSING)
    DELIVERED and CANCELLED are terminal.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderProcessing,
    OrderShipped,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class CancellationActor(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# States from which cancellation is allowed
_CANCELLABLE_STATES = {
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
}

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class Address:
    """A delivery or billing contact captured at checkout time."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL.match(self.email):
            raise ValidationError({"email": ["Valid email is required"]})


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Amounts locked at checkout. See storefront.order.pricing for the policy."""

    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping = Float(default=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="USD")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    sku = String(required=True, max_length=50)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=500, default="")

    @property
    def line_total(self):
        return round(self.price * self.quantity, 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(max_length=30)
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(Address)
    billing_address = ValueObject(Address)
    pricing = ValueObject(OrderPricing)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_intent_id = String(max_length=255)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    cancellation_reason = String(max_length=500)
    cancelled_by = String(choices=CancellationActor)
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        items_data,
        shipping_address,
        pricing,
        payment_method,
        payment_intent_id,
        billing_address=None,
    ):
        """Record a paid checkout.

        Args:
            items_data: List of dicts with product_id, name, sku, price,
                        quantity, image.
            shipping_address: Dict with the Address fields.
            billing_address: Dict with the Address fields. Defaults to the
                             shipping address.
            pricing: Dict with subtotal, tax, shipping, total, currency.
        """
        now = datetime.now(UTC)
        order = cls(
            order_number=_next_order_number(now),
            customer_id=customer_id,
            items=[OrderItem(**item) for item in items_data],
            shipping_address=Address(**shipping_address),
            billing_address=Address(**(billing_address or shipping_address)),
            pricing=OrderPricing(**pricing),
            payment_method=payment_method,
            payment_intent_id=payment_intent_id,
            payment_status=PaymentStatus.COMPLETED.value,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                customer_id=str(customer_id),
                items=json.dumps(
                    [
                        {
                            "product_id": str(i.product_id),
                            "sku": i.sku,
                            "quantity": i.quantity,
                            "price": i.price,
                        }
                        for i in order.items
                    ]
                ),
                subtotal=order.pricing.subtotal,
                tax=order.pricing.tax,
                shipping=order.pricing.shipping,
                total=order.pricing.total,
                currency=order.pricing.currency,
                payment_method=payment_method,
                payment_intent_id=payment_intent_id,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def belongs_to(self, customer_id):
        return str(self.customer_id) == str(customer_id)

    def can_be_cancelled(self):
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    def contains_product(self, product_id):
        return any(str(i.product_id) == str(product_id) for i in self.items)

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def mark_processing(self):
        self._assert_can_transition(OrderStatus.PROCESSING)
        now = datetime.now(UTC)
        self.status = OrderStatus.PROCESSING.value
        self.updated_at = now
        self.raise_(OrderProcessing(order_id=str(self.id), started_at=now))

    def ship(self):
        self._assert_can_transition(OrderStatus.SHIPPED)
        now = datetime.now(UTC)
        self.status = OrderStatus.SHIPPED.value
        self.shipped_at = now
        self.updated_at = now
        self.raise_(OrderShipped(order_id=str(self.id), shipped_at=now))

    def deliver(self):
        self._assert_can_transition(OrderStatus.DELIVERED)
        now = datetime.now(UTC)
        self.status = OrderStatus.DELIVERED.value
        self.delivered_at = now
        self.updated_at = now
        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                total=self.pricing.total,
                delivered_at=now,
            )
        )

    def cancel(self, cancelled_by, reason=None):
        """Cancel the order. Stock is handed back by the caller, in the same unit of work."""
        if not self.can_be_cancelled():
            raise ValidationError({"status": ["Order cannot be cancelled"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_by = cancelled_by
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                items=json.dumps([{"product_id": str(i.product_id), "quantity": i.quantity} for i in self.items]),
                total=self.pricing.total,
                reason=reason,
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )


def _next_order_number(now):
    """ORD-20240115-1A2B3C: placement date plus a random suffix."""
    return f"ORD-{now:%Y%m%d}-{uuid4().hex[:6].upper()}"
