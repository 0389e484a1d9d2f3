"""
In-memory identity adapter - Implements IdentityProvider protocol.

Thread-safe stand-in for the identity provider, used for local development
(IDENTITY_BACKEND=memory) and end-to-end tests. Passwords are kept only as
bcrypt hashes. Verification is simulated with mark_verified().
"""

import logging
import secrets
import threading
from dataclasses import dataclass
from urllib.parse import urlencode
from uuid import uuid4

import bcrypt

from src.domain.exceptions import IdentityProviderError
from src.domain.ports import AccountIdentity, IdentityErrorKind

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass
class _Account:
    uid: str
    email: str
    password_hash: str
    email_verified: bool = False
    display_name: str | None = None

    def snapshot(self) -> AccountIdentity:
        return AccountIdentity(
            uid=self.uid,
            email=self.email,
            email_verified=self.email_verified,
            display_name=self.display_name,
        )


class InMemoryIdentityProvider:
    """
    Implements IdentityProvider protocol with a process-local dict.

    Emails match case-insensitively and are unique, mirroring a real
    provider's conditional create.
    """

    def __init__(
        self, action_base_url: str = "https://auth.example.invalid/__/auth/action", bcrypt_cost: int = 10
    ) -> None:
        self._action_base_url = action_base_url
        self._bcrypt_cost = bcrypt_cost
        self._accounts: dict[str, _Account] = {}
        self._lock = threading.Lock()

    def get_user_by_email(self, email: str) -> AccountIdentity | None:
        with self._lock:
            account = self._find(email)
            return account.snapshot() if account else None

    def create_user(
        self, email: str, password: str, display_name: str | None = None
    ) -> AccountIdentity:
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityProviderError(
                f"Password must be a string at least {MIN_PASSWORD_LENGTH} characters long.",
                kind=IdentityErrorKind.INVALID_ARGUMENT,
            )
        password_hash = bcrypt.hashpw(
            password.encode(), bcrypt.gensalt(rounds=self._bcrypt_cost)
        ).decode()

        with self._lock:
            if self._find(email) is not None:
                raise IdentityProviderError(
                    "The user with the provided email already exists.",
                    kind=IdentityErrorKind.EMAIL_EXISTS,
                )
            account = _Account(
                uid=uuid4().hex,
                email=email,
                password_hash=password_hash,
                display_name=display_name,
            )
            self._accounts[account.uid] = account
            return account.snapshot()

    def delete_user(self, uid: str) -> None:
        with self._lock:
            if self._accounts.pop(uid, None) is None:
                raise IdentityProviderError(
                    f"No user record found for the given identifier ({uid}).",
                    kind=IdentityErrorKind.NOT_FOUND,
                )

    def generate_email_verification_link(self, email: str, continue_url: str) -> str:
        return self._action_link("verifyEmail", email, continue_url)

    def generate_password_reset_link(self, email: str, continue_url: str) -> str:
        return self._action_link("resetPassword", email, continue_url)

    def mark_verified(self, email: str) -> None:
        """Flip the verified flag, as the provider does when a link is followed."""
        with self._lock:
            account = self._find(email)
            if account is None:
                raise IdentityProviderError(
                    f"No user record found for {email}.", kind=IdentityErrorKind.NOT_FOUND
                )
            account.email_verified = True

    def check_password(self, email: str, password: str) -> bool:
        """Compare a password against the stored bcrypt hash."""
        with self._lock:
            account = self._find(email)
            stored = account.password_hash if account else None
        if stored is None:
            return False
        return bcrypt.checkpw(password.encode(), stored.encode())

    def list_users(self) -> list[AccountIdentity]:
        with self._lock:
            return [a.snapshot() for a in self._accounts.values()]

    def _find(self, email: str) -> _Account | None:
        wanted = email.lower()
        for account in self._accounts.values():
            if account.email.lower() == wanted:
                return account
        return None

    def _action_link(self, mode: str, email: str, continue_url: str) -> str:
        with self._lock:
            if self._find(email) is None:
                raise IdentityProviderError(
                    "There is no user record corresponding to the provided email.",
                    kind=IdentityErrorKind.NOT_FOUND,
                )
        query = urlencode(
            {"mode": mode, "oobCode": secrets.token_urlsafe(24), "continueUrl": continue_url}
        )
        return f"{self._action_base_url}?{query}"
