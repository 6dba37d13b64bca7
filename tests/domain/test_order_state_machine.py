"""Tests for order lifecycle transitions and cancellation rules."""

import pytest
from protean.exceptions import ValidationError

from storefront.order.events import OrderCancelled, OrderDelivered, OrderProcessing, OrderShipped
from storefront.order.order import OrderStatus


class TestForwardTransitions:
    def test_full_lifecycle(self, make_order):
        order = make_order()
        order.mark_processing()
        order.ship()
        order.deliver()
        assert order.status == OrderStatus.DELIVERED.value
        assert order.shipped_at is not None
        assert order.delivered_at is not None

    def test_transitions_raise_events(self, make_order):
        order = make_order()
        order._events.clear()
        order.mark_processing()
        order.ship()
        order.deliver()
        assert [type(e) for e in order._events] == [OrderProcessing, OrderShipped, OrderDelivered]

    def test_cannot_skip_processing(self, make_order):
        order = make_order()
        with pytest.raises(ValidationError) as exc:
            order.ship()
        assert exc.value.messages["status"] == ["Cannot transition from pending to shipped"]

    def test_cannot_deliver_before_shipping(self, make_order):
        order = make_order()
        order.mark_processing()
        with pytest.raises(ValidationError):
            order.deliver()

    def test_delivered_is_terminal(self, make_order):
        order = make_order()
        order.mark_processing()
        order.ship()
        order.deliver()
        with pytest.raises(ValidationError):
            order.mark_processing()


class TestCancellation:
    def test_cancel_pending(self, make_order):
        order = make_order()
        order.cancel(cancelled_by="customer", reason="Changed my mind")
        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancellation_reason == "Changed my mind"
        assert order.cancelled_at is not None

    def test_cancel_processing(self, make_order):
        order = make_order()
        order.mark_processing()
        order.cancel(cancelled_by="admin")
        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancelled_by == "admin"

    @pytest.mark.parametrize("steps", [("mark_processing", "ship"), ("mark_processing", "ship", "deliver")])
    def test_cannot_cancel_after_shipping(self, make_order, steps):
        order = make_order()
        for step in steps:
            getattr(order, step)()
        with pytest.raises(ValidationError) as exc:
            order.cancel(cancelled_by="customer")
        assert exc.value.messages["status"] == ["Order cannot be cancelled"]

    def test_cannot_cancel_twice(self, make_order):
        order = make_order()
        order.cancel(cancelled_by="customer")
        with pytest.raises(ValidationError):
            order.cancel(cancelled_by="customer")

    def test_cancel_raises_event_with_lines(self, make_order):
        order = make_order()
        order._events.clear()
        order.cancel(cancelled_by="customer")
        event = order._events[0]
        assert isinstance(event, OrderCancelled)
        assert event.total == 36.6
        assert '"quantity": 2' in event.items
