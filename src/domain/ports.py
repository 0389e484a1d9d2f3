"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class Role(str, Enum):
    """Account roles, stored verbatim in the profile record's ``role`` field."""

    END_USER = "end_user"
    VENDOR = "vendor"
    RIDER = "rider"


class IdentityErrorKind(Enum):
    """
    Provider-neutral failure kinds for identity provider calls.

    Adapters translate provider-specific error codes into one of these,
    so the domain never inspects provider error strings.
    """

    NOT_FOUND = "not_found"
    INVALID_EMAIL = "invalid_email"
    EMAIL_EXISTS = "email_exists"
    INVALID_ARGUMENT = "invalid_argument"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class AccountIdentity:
    """
    Account as held by the identity provider.

    ``email_verified`` is owned by the provider and flips out-of-band when
    the user follows a verification link. It is read on demand, never cached.
    """

    uid: str
    email: str
    email_verified: bool = False
    display_name: str | None = None


@dataclass(frozen=True)
class ProfileRecord:
    """Role-tagged profile document referencing an identity by ``uid``."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def identity_id(self) -> str | None:
        return self.data.get("uid")


@dataclass(frozen=True)
class EmailMessage:
    """Single-recipient transactional email with HTML and plain-text bodies."""

    to: str
    subject: str
    html: str
    text: str


class IdentityProvider(Protocol):
    """Port interface for the identity provider (credentials + action links)."""

    def get_user_by_email(self, email: str) -> AccountIdentity | None:
        """
        Look up an account by email.

        Returns:
            The account, or None when the provider reports "user not found"

        Raises:
            IdentityProviderError: Any other lookup failure (kind-tagged)
        """
        ...

    def create_user(
        self, email: str, password: str, display_name: str | None = None
    ) -> AccountIdentity:
        """
        Create a new, unverified account.

        Raises:
            IdentityProviderError: EMAIL_EXISTS when the email is taken,
                INVALID_ARGUMENT for rejected input, UNAVAILABLE otherwise
        """
        ...

    def delete_user(self, uid: str) -> None:
        """Delete an account by uid."""
        ...

    def generate_email_verification_link(self, email: str, continue_url: str) -> str:
        """Issue a single-use email verification link for the account."""
        ...

    def generate_password_reset_link(self, email: str, continue_url: str) -> str:
        """Issue a single-use password reset link for the account."""
        ...


class ProfileStore(Protocol):
    """Port interface for the profile document store."""

    def add(self, data: dict[str, Any]) -> str:
        """
        Insert a profile record.

        The store assigns the ``joinedon`` timestamp server-side.

        Returns:
            The new record's document id
        """
        ...

    def find_by_identity(self, identity_id: str) -> list[ProfileRecord]:
        """Return every profile record whose ``uid`` equals identity_id (zero or more)."""
        ...

    def delete(self, record_id: str) -> None:
        """Delete a single profile record by document id."""
        ...


class EmailSender(Protocol):
    """Port interface for transactional email delivery."""

    def send(self, message: EmailMessage) -> str:
        """
        Deliver a message synchronously.

        Returns:
            Provider message id

        Raises:
            EmailDeliveryError: When the provider does not accept the message
        """
        ...
