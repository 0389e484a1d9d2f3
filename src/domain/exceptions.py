"""
Domain exceptions - Semantic error types for account provisioning.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
The API layer maps each family to an HTTP status.
"""

from .ports import IdentityErrorKind


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientError(RegistrationError):
    """Malformed or missing input. Raised before any external call."""

    pass


class MissingFieldsError(ClientError):
    """One or more role-required fields are absent or blank."""

    def __init__(self, message: str, fields: list[str]) -> None:
        super().__init__(message)
        self.fields = fields


class InvalidEmailError(ClientError):
    """Email address is improperly formatted."""

    def __init__(self, message: str = "The email address is improperly formatted.") -> None:
        super().__init__(message)


class ConflictError(RegistrationError):
    """Action not applicable to the account's current state. No mutation performed."""

    pass


class EmailAlreadyVerified(ConflictError):
    """A verified account already owns the email."""

    def __init__(
        self, message: str = "Email is already in use and verified. Please log in."
    ) -> None:
        super().__init__(message)


class AccountAlreadyVerified(ConflictError):
    """Cleanup refused: the account has proven mailbox ownership."""

    def __init__(self, message: str = "User is already verified.") -> None:
        super().__init__(message)


class EmailNotVerified(ConflictError):
    """Password reset refused until the mailbox is verified."""

    def __init__(
        self,
        message: str = (
            "Your email is not verified. "
            "Please verify your email before resetting your password."
        ),
    ) -> None:
        super().__init__(message)


class RegistrationInProgress(ConflictError):
    """Another registration created the identity between lookup and create."""

    def __init__(
        self,
        message: str = "A registration for this email is already in progress. Please try again.",
    ) -> None:
        super().__init__(message)


class NotFoundError(RegistrationError):
    """Lookup missed where a match was required."""

    pass


class AccountNotFound(NotFoundError):
    """No account exists for the email."""

    def __init__(self, message: str = "No user found with this email address.") -> None:
        super().__init__(message)


class DependencyError(RegistrationError):
    """An external collaborator failed for a reason other than "not found"."""

    pass


class IdentityProviderError(DependencyError):
    """Identity provider call failed; ``kind`` is provider-neutral."""

    def __init__(
        self, message: str, kind: IdentityErrorKind = IdentityErrorKind.UNAVAILABLE
    ) -> None:
        super().__init__(message)
        self.kind = kind


class ProfileStoreError(DependencyError):
    """Profile store call failed."""

    pass


class EmailDeliveryError(DependencyError):
    """Email dispatcher did not accept the message."""

    pass


class VerificationEmailFailed(EmailDeliveryError):
    """
    Verification email could not be sent during registration.

    Raised only after the just-created account was rolled back.
    ``compensated`` is False when the rollback itself failed and the
    account needs an out-of-band sweep.
    """

    def __init__(
        self,
        message: str = (
            "Verification email could not be delivered. Please try registering again."
        ),
        compensated: bool = True,
    ) -> None:
        super().__init__(message)
        self.compensated = compensated
