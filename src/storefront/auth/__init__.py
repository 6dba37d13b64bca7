"""Token verifier factory.

Provides get_verifier() / set_verifier() to swap implementations.
FakeTokenVerifier is the default for development and testing.
"""

from storefront.auth.fake_adapter import FakeTokenVerifier
from storefront.auth.port import TokenVerifier

_current_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    """Return the current token verifier. Defaults to FakeTokenVerifier."""
    global _current_verifier
    if _current_verifier is None:
        _current_verifier = FakeTokenVerifier()
    return _current_verifier


def set_verifier(verifier: TokenVerifier) -> None:
    global _current_verifier
    _current_verifier = verifier


def reset_verifier() -> None:
    global _current_verifier
    _current_verifier = None
