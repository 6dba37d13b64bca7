"""Payment endpoints: thin wrappers over the payment gateway port."""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal, require_dev_environment
from storefront.api.schemas import ConfigureGatewayRequest, ConfirmPaymentRequest, CreatePaymentIntentRequest
from storefront.api.views import ok
from storefront.auth.port import Principal
from storefront.cart.cart import Cart
from storefront.order.pricing import price_cart
from storefront.payments import get_gateway
from storefront.payments.fake_adapter import FakeGateway

logger = structlog.get_logger(__name__)

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/create-intent")
async def create_payment_intent(
    body: CreatePaymentIntentRequest | None = None,
    principal: Principal = Depends(current_principal),
):
    """Open an intent for the current cart total. The amount is never taken from the client."""
    cart = current_domain.repository_for(Cart).find_by_customer(principal.customer_id)
    if cart is None or not cart.items:
        raise ValidationError({"cart": ["Cart is empty"]})

    total = price_cart(cart)["total"]
    intent = get_gateway().create_payment_intent(
        amount=total,
        currency=body.currency if body else "usd",
        metadata={"customer_id": principal.customer_id},
    )
    logger.info(
        "payment_intent_created",
        payment_intent_id=intent.intent_id,
        customer_id=principal.customer_id,
        amount=total,
    )
    return ok(
        {
            "client_secret": intent.client_secret,
            "payment_intent_id": intent.intent_id,
            "amount": intent.amount,
        }
    )


@payment_router.post("/confirm")
async def confirm_payment(body: ConfirmPaymentRequest, principal: Principal = Depends(current_principal)):
    intent = get_gateway().retrieve_payment_intent(body.payment_intent_id)
    if intent is None:
        raise ObjectNotFoundError("Payment intent not found")

    if not intent.succeeded:
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Payment not completed", "data": {"status": intent.status}},
        )

    return ok(
        {"payment_intent_id": intent.intent_id, "status": intent.status, "amount": intent.amount},
        "Payment confirmed successfully",
    )


@payment_router.post("/gateway/configure", dependencies=[Depends(require_dev_environment)])
async def configure_gateway(body: ConfigureGatewayRequest):
    """Configure the FakeGateway behavior (development and test only)."""
    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(should_succeed=body.should_succeed, failure_reason=body.failure_reason)
    return ok(
        {
            "gateway": type(gateway).__name__,
            "should_succeed": gateway.should_succeed,
            "failure_reason": gateway.failure_reason,
        }
    )
