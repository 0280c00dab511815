"""In-memory identity provider for development and testing.

Accounts and opaque bearer tokens live in dictionaries. Tokens are issued
explicitly with ``issue_token``; there is no login flow.
"""

import secrets
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from marketplace.errors import EmailAlreadyExists, InvalidToken, TokenExpired, TokenRevoked
from marketplace.identity.port import IdentityProvider, VerifiedIdentity


class InMemoryIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self.accounts: dict[str, dict] = {}
        self._tokens: dict[str, dict] = {}

    def create_account(self, email: str, password: str, display_name: str) -> str:
        normalized = email.strip().lower()
        if any(account["email"] == normalized for account in self.accounts.values()):
            raise EmailAlreadyExists("An account with this email address already exists")

        uid = uuid4().hex
        self.accounts[uid] = {
            "email": normalized,
            "password": password,
            "display_name": display_name,
        }
        return uid

    def issue_token(self, uid: str, email: str | None = None, expires_in: timedelta = timedelta(hours=1)) -> str:
        token = secrets.token_urlsafe(24)
        if email is None and uid in self.accounts:
            email = self.accounts[uid]["email"]
        self._tokens[token] = {
            "uid": uid,
            "email": email,
            "expires_at": datetime.now(UTC) + expires_in,
            "revoked": False,
        }
        return token

    def verify_token(self, token: str) -> VerifiedIdentity:
        record = self._tokens.get(token)
        if record is None:
            raise InvalidToken("Invalid authentication token")
        if record["revoked"]:
            raise TokenRevoked("Your session has been revoked. Please log in again")
        if record["expires_at"] <= datetime.now(UTC):
            raise TokenExpired("Authentication token has expired. Please login again.")
        return VerifiedIdentity(uid=record["uid"], email=record["email"])

    def revoke_tokens(self, uid: str) -> None:
        for record in self._tokens.values():
            if record["uid"] == uid:
                record["revoked"] = True

    def delete_account(self, uid: str) -> None:
        self.accounts.pop(uid, None)
        self._tokens = {token: record for token, record in self._tokens.items() if record["uid"] != uid}

    def reset(self) -> None:
        self.accounts.clear()
        self._tokens.clear()
