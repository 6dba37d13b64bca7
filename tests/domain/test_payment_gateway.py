from storefront.payments import get_gateway, reset_gateway, set_gateway
from storefront.payments.fake_adapter import REQUIRES_PAYMENT_METHOD, FakeGateway


class TestFakeGateway:
    def test_intents_succeed_by_default(self):
        gateway = FakeGateway()
        intent = gateway.create_payment_intent(36.6, "usd", {"customer_id": "cust-001"})
        assert intent.succeeded
        assert intent.intent_id.startswith("pi_fake_")
        assert intent.client_secret.startswith(intent.intent_id)
        assert intent.metadata == {"customer_id": "cust-001"}

    def test_configured_failure(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False)
        intent = gateway.create_payment_intent(10.0, "usd")
        assert intent.status == REQUIRES_PAYMENT_METHOD
        assert not intent.succeeded

    def test_retrieve(self):
        gateway = FakeGateway()
        intent = gateway.create_payment_intent(10.0, "usd")
        assert gateway.retrieve_payment_intent(intent.intent_id) == intent
        assert gateway.retrieve_payment_intent("pi_unknown") is None

    def test_calls_are_recorded(self):
        gateway = FakeGateway()
        gateway.create_payment_intent(10.0, "usd")
        gateway.retrieve_payment_intent("pi_unknown")
        assert [c["method"] for c in gateway.calls] == ["create_payment_intent", "retrieve_payment_intent"]


class TestGatewayFactory:
    def test_default_is_fake(self):
        assert isinstance(get_gateway(), FakeGateway)

    def test_set_and_reset(self):
        custom = FakeGateway()
        set_gateway(custom)
        assert get_gateway() is custom
        reset_gateway()
        assert get_gateway() is not custom
