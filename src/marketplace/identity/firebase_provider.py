"""Firebase Authentication adapter (production stub).

This is a placeholder for the firebase-admin SDK integration. Only the error
translation is real: Firebase reports failures as ``auth/...`` codes and the
adapter is the one place allowed to know them.
"""

from marketplace.errors import (
    AuthenticationError,
    EmailAlreadyExists,
    InvalidToken,
    MarketplaceError,
    TokenExpired,
    TokenRevoked,
    UpstreamServiceError,
)
from marketplace.identity.port import IdentityProvider, VerifiedIdentity

_ERROR_CODES: dict[str, tuple[type[MarketplaceError], str]] = {
    "auth/id-token-expired": (TokenExpired, "Your session has expired. Please log in again"),
    "auth/id-token-revoked": (TokenRevoked, "Your session has been revoked. Please log in again"),
    "auth/invalid-id-token": (InvalidToken, "Invalid authentication token"),
    "auth/argument-error": (InvalidToken, "Invalid authentication token"),
    "auth/email-already-exists": (EmailAlreadyExists, "An account with this email already exists"),
    "auth/user-disabled": (AuthenticationError, "This account has been disabled"),
}


def translate_error(code: str) -> MarketplaceError:
    """Map a Firebase error code onto the marketplace error taxonomy."""
    if code in _ERROR_CODES:
        error_cls, message = _ERROR_CODES[code]
        return error_cls(message)
    if code.startswith("auth/"):
        return AuthenticationError("Authentication error occurred")
    return UpstreamServiceError("Identity service temporarily unavailable. Please try again.")


class FirebaseIdentityProvider(IdentityProvider):
    """Production Firebase adapter. Not yet implemented."""

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id

    def verify_token(self, token: str) -> VerifiedIdentity:
        raise NotImplementedError(
            "FirebaseIdentityProvider.verify_token() is not yet implemented. "
            "Call firebase_admin.auth.verify_id_token(token, check_revoked=True) here "
            "and raise translate_error(exc.code) on failure."
        )

    def create_account(self, email: str, password: str, display_name: str) -> str:
        raise NotImplementedError(
            "FirebaseIdentityProvider.create_account() is not yet implemented. "
            "Call firebase_admin.auth.create_user() here."
        )

    def revoke_tokens(self, uid: str) -> None:
        raise NotImplementedError(
            "FirebaseIdentityProvider.revoke_tokens() is not yet implemented. "
            "Call firebase_admin.auth.revoke_refresh_tokens(uid) here."
        )

    def delete_account(self, uid: str) -> None:
        raise NotImplementedError(
            "FirebaseIdentityProvider.delete_account() is not yet implemented. "
            "Call firebase_admin.auth.delete_user(uid) here."
        )
