import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api import (
    admin_router,
    auth_router,
    cart_router,
    order_router,
    payment_router,
    product_router,
    register_exception_handlers,
    review_router,
)
from storefront.auth import get_verifier


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (
        auth_router,
        product_router,
        cart_router,
        payment_router,
        order_router,
        review_router,
        admin_router,
    ):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def auth(customer_id):
    """Authorization headers for the default customer."""
    return {"Authorization": f"Bearer {get_verifier().issue(customer_id)}"}


@pytest.fixture()
def admin_auth():
    return {"Authorization": f"Bearer {get_verifier().issue('admin-001', role='admin')}"}
