"""Identity provider port (abstract interface).

The API authenticates callers through this contract only. Adapters translate
their vendor's error codes into the marketplace error taxonomy, so nothing
outside an adapter ever inspects vendor error strings.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity asserted by a successfully verified credential."""

    uid: str
    email: str | None = None
    claims: dict = field(default_factory=dict)


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def verify_token(self, token: str) -> VerifiedIdentity:
        """Verify a bearer credential.

        Raises:
            InvalidToken: the credential cannot be verified.
            TokenExpired: the credential was valid but has expired.
            TokenRevoked: the credential was revoked.
        """
        ...

    @abstractmethod
    def create_account(self, email: str, password: str, display_name: str) -> str:
        """Create a login account and return its uid.

        Raises:
            EmailAlreadyExists: an account already uses this email.
        """
        ...

    @abstractmethod
    def revoke_tokens(self, uid: str) -> None:
        """Revoke every credential issued for ``uid``."""
        ...

    @abstractmethod
    def delete_account(self, uid: str) -> None:
        """Remove the login account ``uid`` along with its credentials.

        Used to roll back ``create_account`` when the marketplace user cannot
        be recorded.
        """
        ...
