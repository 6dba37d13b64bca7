"""Back-office order status changes: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.cancellation import cancel_and_restock
from storefront.order.order import CancellationActor, Order, OrderStatus


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)
    reason = String(max_length=500)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        target = OrderStatus(command.status)
        if target == OrderStatus.PROCESSING:
            order.mark_processing()
        elif target == OrderStatus.SHIPPED:
            order.ship()
        elif target == OrderStatus.DELIVERED:
            order.deliver()
        elif target == OrderStatus.CANCELLED:
            cancel_and_restock(order, cancelled_by=CancellationActor.ADMIN.value, reason=command.reason)
        else:
            raise ValidationError({"status": [f"Cannot transition from {order.status} to {target.value}"]})

        repo.add(order)
        return str(order.id)
