import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported and initialized."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    """Run every test inside the domain context and leave no data behind."""
    from storefront.auth import reset_verifier
    from storefront.payments import reset_gateway

    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()

    reset_gateway()
    reset_verifier()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def customer_id():
    return "cust-001"


@pytest.fixture()
def address():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
    }


@pytest.fixture()
def add_product():
    """Add a product through the catalogue command and return the stored aggregate."""
    from protean import current_domain

    from storefront.product.management import AddProduct
    from storefront.product.product import Product

    counter = {"n": 0}

    def _add(**overrides):
        counter["n"] += 1
        data = {
            "name": f"Test Product {counter['n']}",
            "description": "A product used in tests.",
            "price": 10.0,
            "category": "accessories",
            "brand": "Acme",
            "sku": f"TEST-{counter['n']:03d}",
            "quantity": 5,
        }
        data.update(overrides)
        product_id = current_domain.process(AddProduct(**data), asynchronous=False)
        return current_domain.repository_for(Product).get(product_id)

    return _add


@pytest.fixture()
def fill_cart(customer_id):
    """Put (product, quantity) pairs into the customer's cart."""
    from protean import current_domain

    from storefront.cart.items import AddToCart

    def _fill(*lines, customer=None):
        for product, quantity in lines:
            current_domain.process(
                AddToCart(
                    customer_id=customer or customer_id,
                    product_id=str(product.id),
                    quantity=quantity,
                ),
                asynchronous=False,
            )

    return _fill


@pytest.fixture()
def paid_intent(customer_id):
    """Create a succeeded payment intent for the current cart total."""
    from protean import current_domain

    from storefront.cart.cart import Cart
    from storefront.order.pricing import price_cart
    from storefront.payments import get_gateway

    def _pay(customer=None):
        cart = current_domain.repository_for(Cart).for_customer(customer or customer_id)
        intent = get_gateway().create_payment_intent(price_cart(cart)["total"], "usd")
        return intent.intent_id

    return _pay


@pytest.fixture()
def place_order(customer_id, address, paid_intent):
    """Check out the customer's current cart and return the order id."""
    import json

    from protean import current_domain

    from storefront.order.placement import PlaceOrder

    def _place(customer=None, payment_intent_id=None):
        customer = customer or customer_id
        return current_domain.process(
            PlaceOrder(
                customer_id=customer,
                shipping_address=json.dumps(address),
                payment_method="credit_card",
                payment_intent_id=payment_intent_id or paid_intent(customer),
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture()
def competing_reservation():
    """Install a gateway that lets another request take stock mid-checkout.

    The first payment lookup reserves ``quantity`` of the product from a
    separate thread with its own domain context, so that reservation commits
    after checkout has read the product and before checkout commits.
    """
    import threading

    from storefront.domain import storefront
    from storefront.payments import set_gateway
    from storefront.payments.fake_adapter import FakeGateway
    from storefront.product.product import Product

    class CompetingGateway(FakeGateway):
        def __init__(self, product_id, quantity):
            super().__init__()
            self.product_id = product_id
            self.quantity = quantity
            self.competed = False

        def retrieve_payment_intent(self, intent_id):
            if not self.competed:
                self.competed = True
                errors = []
                worker = threading.Thread(target=self._reserve, args=(errors,))
                worker.start()
                worker.join()
                if errors:
                    raise errors[0]
            return super().retrieve_payment_intent(intent_id)

        def _reserve(self, errors):
            try:
                with storefront.domain_context():
                    repo = storefront.repository_for(Product)
                    product = repo.get(self.product_id)
                    product.reserve_stock(self.quantity, "ord-concurrent")
                    repo.add(product)
            except Exception as exc:
                errors.append(exc)

    def _install(product, quantity=1):
        gateway = CompetingGateway(str(product.id), quantity)
        set_gateway(gateway)
        return gateway

    return _install
