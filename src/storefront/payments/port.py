"""Payment gateway port (abstract interface).

Checkout never talks to a payment provider directly. It goes through this
contract, so FakeGateway (dev/test) and a real provider adapter can be
swapped without changing any domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class PaymentIntent:
    """A provider-side record of an attempt to collect `amount`."""

    intent_id: str
    amount: float
    currency: str
    status: str
    client_secret: str | None = None
    metadata: dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(
        self,
        amount: float,
        currency: str,
        metadata: dict | None = None,
    ) -> PaymentIntent:
        """Open a payment intent for the given amount."""
        ...

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent | None:
        """Look up an intent. Returns None when the provider does not know it."""
        ...
