"""Daily sales projection: back-office dashboard figures.

Maintains daily counts of orders placed, delivered and cancelled, with the
money each represents. Keyed by date (YYYY-MM-DD) of the event.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderDelivered, OrderPlaced
from storefront.order.order import Order


@storefront.projection
class DailySales:
    date = String(identifier=True, required=True, max_length=10)  # YYYY-MM-DD
    orders_placed = Integer(default=0)
    orders_delivered = Integer(default=0)
    orders_cancelled = Integer(default=0)
    gross_revenue = Float(default=0.0)
    delivered_revenue = Float(default=0.0)
    cancelled_value = Float(default=0.0)


def _get_or_create(date_key):
    repo = current_domain.repository_for(DailySales)
    try:
        return repo.get(date_key)
    except ObjectNotFoundError:
        return DailySales(
            date=date_key,
            orders_placed=0,
            orders_delivered=0,
            orders_cancelled=0,
            gross_revenue=0.0,
            delivered_revenue=0.0,
            cancelled_value=0.0,
        )


@storefront.projector(projector_for=DailySales, aggregates=[Order])
class DailySalesProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        record = _get_or_create(event.placed_at.date().isoformat())
        record.orders_placed = (record.orders_placed or 0) + 1
        record.gross_revenue = round((record.gross_revenue or 0.0) + (event.total or 0.0), 2)
        current_domain.repository_for(DailySales).add(record)

    @on(OrderDelivered)
    def on_order_delivered(self, event):
        record = _get_or_create(event.delivered_at.date().isoformat())
        record.orders_delivered = (record.orders_delivered or 0) + 1
        record.delivered_revenue = round((record.delivered_revenue or 0.0) + (event.total or 0.0), 2)
        current_domain.repository_for(DailySales).add(record)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        record = _get_or_create(event.cancelled_at.date().isoformat())
        record.orders_cancelled = (record.orders_cancelled or 0) + 1
        record.cancelled_value = round((record.cancelled_value or 0.0) + (event.total or 0.0), 2)
        current_domain.repository_for(DailySales).add(record)
