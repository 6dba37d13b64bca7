"""The payment gateway checkout and the payments API talk to.

One gateway is active per process. It starts out as a FakeGateway, which
local runs, load tests and the test suite all rely on; a deployment swaps in
its provider's adapter at startup with `set_gateway`.
"""

from storefront.payments.fake_adapter import FakeGateway
from storefront.payments.port import PaymentGateway

_active: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    global _active
    if _active is None:
        _active = FakeGateway()
    return _active


def set_gateway(gateway: PaymentGateway) -> None:
    global _active
    _active = gateway


def reset_gateway() -> None:
    """Forget the active gateway; the next lookup creates a fresh FakeGateway."""
    global _active
    _active = None
