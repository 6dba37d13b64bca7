"""Token verifier port (abstract interface).

The storefront does not issue or check credentials itself. Requests carry a
bearer token and an adapter behind this contract resolves it to a Principal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    customer_id: str
    role: str = Role.CUSTOMER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


class TokenVerifier(ABC):
    """Abstract token verifier interface."""

    @abstractmethod
    def verify(self, token: str) -> Principal | None:
        """Resolve a bearer token. Returns None for unknown or expired tokens."""
        ...
