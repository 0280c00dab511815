"""Authorization pipeline: identity resolution and role gates.

Handlers declare what they need as FastAPI dependencies. Role gates depend on
``authenticated_user``, so identity is always resolved before a role is
checked. Resolving identity has no side effects on the stored user.
"""

from dataclasses import dataclass
from typing import Annotated

import structlog
from fastapi import Depends, Header, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.errors import AccountDisabled, Forbidden, MarketplaceError, Unauthorized, UserNotFound
from marketplace.identity import IdentityProvider
from marketplace.user.user import User

logger = structlog.get_logger(__name__)

_BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str
    role: str
    first_name: str
    last_name: str

    @classmethod
    def from_user(cls, user: User) -> "CurrentUser":
        return cls(
            id=str(user.id),
            email=user.email,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def get_identity_provider(request: Request) -> IdentityProvider:
    """The identity provider the application was built with."""
    return request.app.state.identity_provider


def _bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise Unauthorized("No valid authorization token provided")
    token = authorization[len(_BEARER_PREFIX) :].strip()
    if not token:
        raise Unauthorized("No valid authorization token provided")
    return token


def resolve_user(authorization: str | None, provider: IdentityProvider) -> CurrentUser:
    identity = provider.verify_token(_bearer_token(authorization))

    try:
        user = current_domain.repository_for(User).get(identity.uid)
    except ObjectNotFoundError as exc:
        raise UserNotFound("User profile not found. Please complete registration.") from exc

    if not user.is_active:
        raise AccountDisabled("Your account has been disabled. Please contact support.")

    return CurrentUser.from_user(user)


async def authenticated_user(
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    return resolve_user(authorization, provider)


async def optional_user(
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser | None:
    """Like ``authenticated_user`` but leaves the request anonymous on any failure."""
    if authorization is None:
        return None
    try:
        return resolve_user(authorization, provider)
    except MarketplaceError as exc:
        logger.debug("Optional authentication failed", reason=exc.title)
        return None


def require_role(*roles: str):
    """Build a dependency that admits only callers holding one of ``roles``."""

    async def role_gate(user: Annotated[CurrentUser, Depends(authenticated_user)]) -> CurrentUser:
        if user.role not in roles:
            raise Forbidden(f"This action requires the {' or '.join(roles)} role")
        return user

    return role_gate


AuthenticatedUser = Annotated[CurrentUser, Depends(authenticated_user)]
OptionalUser = Annotated[CurrentUser | None, Depends(optional_user)]
ArtisanUser = Annotated[CurrentUser, Depends(require_role("artisan"))]
AdminUser = Annotated[CurrentUser, Depends(require_role("admin"))]
CustomerUser = Annotated[CurrentUser, Depends(require_role("customer"))]
