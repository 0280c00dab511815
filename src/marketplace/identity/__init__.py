"""Identity provider adapters.

The provider is built once at startup from the ``identity_provider`` setting
and handed to the API; nothing imports a shared instance.
"""

import os

from marketplace.identity.port import IdentityProvider, VerifiedIdentity


def build_identity_provider(name: str) -> IdentityProvider:
    """Construct the identity provider adapter named in configuration."""
    if name == "memory":
        from marketplace.identity.memory_provider import InMemoryIdentityProvider

        return InMemoryIdentityProvider()
    if name == "firebase":
        from marketplace.identity.firebase_provider import FirebaseIdentityProvider

        return FirebaseIdentityProvider(project_id=os.environ.get("FIREBASE_PROJECT_ID", ""))
    raise ValueError(f"Unknown identity provider: {name}")


__all__ = ["IdentityProvider", "VerifiedIdentity", "build_identity_provider"]
