"""In-memory token verifier for development and testing.

Tokens are opaque random strings issued by issue() and remembered until
revoked. Nothing is signed or persisted.
"""

from secrets import token_urlsafe
from uuid import uuid4

from storefront.auth.port import Principal, Role, TokenVerifier


class FakeTokenVerifier(TokenVerifier):
    def __init__(self) -> None:
        self.tokens: dict[str, Principal] = {}

    def issue(self, customer_id: str | None = None, role: str = Role.CUSTOMER.value) -> str:
        """Issue a token for `customer_id` (a new id when omitted)."""
        token = token_urlsafe(24)
        self.tokens[token] = Principal(customer_id=customer_id or str(uuid4()), role=role)
        return token

    def revoke(self, token: str) -> None:
        self.tokens.pop(token, None)

    def verify(self, token: str) -> Principal | None:
        return self.tokens.get(token)
