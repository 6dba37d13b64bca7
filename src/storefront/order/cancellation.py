"""Order cancellation: command and handler.

Cancelling hands every line's quantity back to its product within the same
Unit of Work that records the cancellation.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import CancellationActor, Order
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier()  # Required when a customer cancels their own order
    reason = String(max_length=500)
    cancelled_by = String(required=True, choices=CancellationActor)


def cancel_and_restock(order, cancelled_by, reason=None):
    """Cancel `order` and release its stock. The caller persists the order."""
    order.cancel(cancelled_by=cancelled_by, reason=reason)

    product_repo = current_domain.repository_for(Product)
    for item in order.items:
        product = product_repo.get(item.product_id)
        product.release_stock(item.quantity, order.id)
        product_repo.add(product)

    logger.info(
        "order_cancelled",
        order_id=str(order.id),
        cancelled_by=cancelled_by,
        lines=len(order.items),
    )


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        if command.cancelled_by == CancellationActor.CUSTOMER.value:
            # Customers only see their own orders
            order = repo.find_for_customer(command.order_id, command.customer_id)
            if order is None:
                raise ObjectNotFoundError("Order not found")
        else:
            order = repo.get(command.order_id)

        cancel_and_restock(order, cancelled_by=command.cancelled_by, reason=command.reason)
        repo.add(order)
        return str(order.id)
