"""Storefront HTTP API package."""

from storefront.api.admin import admin_router
from storefront.api.auth import auth_router
from storefront.api.cart import cart_router
from storefront.api.errors import register_exception_handlers
from storefront.api.orders import order_router
from storefront.api.payments import payment_router
from storefront.api.products import product_router
from storefront.api.reviews import review_router

__all__ = [
    "admin_router",
    "auth_router",
    "cart_router",
    "order_router",
    "payment_router",
    "product_router",
    "review_router",
    "register_exception_handlers",
]
