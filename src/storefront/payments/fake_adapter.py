"""Configurable fake payment gateway for development and testing.

Intents live in memory. By default every intent is created already
succeeded, as if the customer completed payment on the client; configure the
gateway to fail and new intents stay in `requires_payment_method`.
"""

from uuid import uuid4

from storefront.payments.port import SUCCEEDED, PaymentGateway, PaymentIntent

REQUIRES_PAYMENT_METHOD = "requires_payment_method"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.intents: dict[str, PaymentIntent] = {}
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_intent(
        self,
        amount: float,
        currency: str,
        metadata: dict | None = None,
    ) -> PaymentIntent:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount,
                "currency": currency,
                "metadata": metadata or {},
            }
        )

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = PaymentIntent(
            intent_id=intent_id,
            amount=amount,
            currency=currency,
            status=SUCCEEDED if self.should_succeed else REQUIRES_PAYMENT_METHOD,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:12]}",
            metadata=dict(metadata or {}),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent | None:
        self.calls.append({"method": "retrieve_payment_intent", "intent_id": intent_id})
        return self.intents.get(intent_id)
