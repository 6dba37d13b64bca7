"""Customer order endpoints: checkout, history and cancellation."""

import json

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal
from storefront.api.schemas import CancelOrderRequest, PlaceOrderRequest
from storefront.api.views import ok, order_view, pagination
from storefront.auth.port import Principal
from storefront.order.cancellation import CancelOrder
from storefront.order.order import CancellationActor, Order
from storefront.order.placement import PlaceOrder

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _own_order(order_id, customer_id):
    order = current_domain.repository_for(Order).find_for_customer(order_id, customer_id)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    return order


@order_router.post("", status_code=201)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(current_principal)):
    command = PlaceOrder(
        customer_id=principal.customer_id,
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        billing_address=json.dumps(body.billing_address.model_dump()) if body.billing_address else None,
        payment_method=body.payment_method,
        payment_intent_id=body.payment_intent_id,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return ok(order_view(_own_order(order_id, principal.customer_id)), "Order created successfully")


@order_router.get("")
async def list_my_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    principal: Principal = Depends(current_principal),
):
    results = current_domain.repository_for(Order).for_customer(principal.customer_id, page=page, limit=limit)
    return ok(
        {
            "orders": [order_view(o) for o in results.items],
            "pagination": pagination(page, limit, len(results.items), results.total),
        }
    )


@order_router.get("/{order_id}")
async def get_my_order(order_id: str, principal: Principal = Depends(current_principal)):
    return ok(order_view(_own_order(order_id, principal.customer_id)))


@order_router.put("/{order_id}/cancel")
async def cancel_my_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    principal: Principal = Depends(current_principal),
):
    command = CancelOrder(
        order_id=order_id,
        customer_id=principal.customer_id,
        reason=body.reason if body else None,
        cancelled_by=CancellationActor.CUSTOMER.value,
    )
    current_domain.process(command, asynchronous=False)
    return ok(order_view(_own_order(order_id, principal.customer_id)), "Order cancelled successfully")
