"""
Registration domain service - Account provisioning lifecycle.

This module contains the core business logic that reconciles three
external systems into one consistent account:

- Identity provider: credentials, verification state, action links
- Profile store: role-tagged profile documents keyed by identity uid
- Email dispatcher: transactional verification and reset emails

Account Lifecycle
=================

    (none) --register--> PENDING_VERIFICATION --(user follows link)--> ACTIVE

PENDING_VERIFICATION is reclaimable: a new registration for the same email
cascade-deletes the stale identity and its profile records first.
ACTIVE is owned by the identity provider and never set locally; the
``email_verified`` flag is fetched on demand for every decision.

Rollback
========

Once an identity is created, any failure before the verification email is
accepted by the dispatcher rolls the identity back through cascade_delete.
An identity is never left standing without its profile record.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .exceptions import (
    AccountAlreadyVerified,
    AccountNotFound,
    ClientError,
    EmailAlreadyVerified,
    EmailDeliveryError,
    EmailNotVerified,
    IdentityProviderError,
    InvalidEmailError,
    MissingFieldsError,
    RegistrationInProgress,
    VerificationEmailFailed,
)
from .locks import EmailLocks
from .messages import password_reset_email, verification_email
from .ports import (
    AccountIdentity,
    EmailSender,
    IdentityErrorKind,
    IdentityProvider,
    ProfileStore,
    Role,
)
from .roles import RolePolicy, policy_for

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    """Outcome of deleting an identity together with its profile records."""

    identity_id: str
    profiles_deleted: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


@dataclass
class RegistrationService:
    """
    Domain service for account registration, password reset and cleanup.

    Provider clients are injected; the service holds no account state of
    its own beyond the per-email locks.
    """

    identity_provider: IdentityProvider
    profile_store: ProfileStore
    email_sender: EmailSender
    verification_continue_url: str = "https://schoolchow.com/verifyemail"
    password_reset_continue_url: str = "https://schoolchow.com/resetpassword"
    locks: EmailLocks = field(default_factory=EmailLocks)

    def register(self, role: Role, payload: Mapping[str, Any]) -> str:
        """
        Register an account for ``role`` and send a verification email.

        Args:
            role: Account role selecting the required fields and profile layout
            payload: Request fields (email, password and role-specific fields)

        Returns:
            Role-specific confirmation message

        Raises:
            MissingFieldsError: A required field is absent (no external calls made)
            InvalidEmailError: Email is improperly formatted
            EmailAlreadyVerified: A verified account owns the email (no mutation)
            RegistrationInProgress: A concurrent registration won the create
            VerificationEmailFailed: Dispatch failed; the new account was rolled back
            DependencyError: Any other collaborator failure
        """
        policy = policy_for(role)
        missing = policy.missing_fields(payload)
        if missing:
            raise MissingFieldsError(policy.missing_fields_message, missing)

        email = self._normalize_email(payload["email"])

        with self.locks.hold(email):
            existing = self._lookup(email)
            if existing is not None:
                if existing.email_verified:
                    raise EmailAlreadyVerified()
                logger.info("Reclaiming unverified account %s for %s", existing.uid, email)
                self.cascade_delete(existing)

            identity = self._create_identity(email, payload["password"], policy.display_name(payload))

            try:
                self._create_profile(identity, policy, payload)
                link = self.identity_provider.generate_email_verification_link(
                    email, self.verification_continue_url
                )
            except Exception:
                logger.exception("Registration of %s failed after account creation", email)
                self._compensate(identity)
                raise

            message = verification_email(email, link, payload.get(policy.greeting_field))
            try:
                message_id = self.email_sender.send(message)
            except Exception as exc:
                logger.error("Verification email to %s failed: %s", email, exc)
                compensated = self._compensate(identity)
                raise VerificationEmailFailed(compensated=compensated) from exc

        logger.info(
            "Registered %s account %s for %s (message %s)",
            policy.role.value,
            identity.uid,
            email,
            message_id,
        )
        return policy.success_message

    def request_password_reset(self, email: str | None) -> str:
        """
        Send a password reset link to a verified account.

        Raises:
            MissingFieldsError: No email given
            InvalidEmailError: Email is improperly formatted
            AccountNotFound: No account for the email
            EmailNotVerified: Account has not proven mailbox ownership
            EmailDeliveryError: Dispatch failed (nothing to roll back)
        """
        if not email or not email.strip():
            raise MissingFieldsError("Please provide your email address.", ["email"])
        email = self._normalize_email(email)

        user = self._lookup(email)
        if user is None:
            raise AccountNotFound()
        if not user.email_verified:
            raise EmailNotVerified()

        try:
            link = self.identity_provider.generate_password_reset_link(
                email, self.password_reset_continue_url
            )
        except IdentityProviderError as exc:
            if exc.kind == IdentityErrorKind.NOT_FOUND:
                raise AccountNotFound() from exc
            raise

        try:
            self.email_sender.send(password_reset_email(email, link, user.display_name))
        except Exception as exc:
            logger.error("Password reset email to %s failed: %s", email, exc)
            raise EmailDeliveryError(
                "Password reset email could not be delivered. Please try again."
            ) from exc

        logger.info("Password reset email sent to %s", email)
        return "Password reset email sent successfully."

    def delete_unverified(self, email: str | None) -> str:
        """
        Purge an unverified account and its profile records.

        Raises:
            MissingFieldsError: No email given
            AccountNotFound: No account for the email
            AccountAlreadyVerified: Account is verified (no mutation)
        """
        if not email or not email.strip():
            raise MissingFieldsError("No email provided.", ["email"])
        email = self._normalize_email(email)

        with self.locks.hold(email):
            user = self._lookup(email)
            if user is None:
                raise AccountNotFound()
            if user.email_verified:
                raise AccountAlreadyVerified()
            result = self.cascade_delete(user)

        logger.info(
            "Deleted unverified account %s (%d profile record(s))",
            result.identity_id,
            result.profiles_deleted,
        )
        return "Deleted unverified user successfully."

    def cascade_delete(self, identity: AccountIdentity) -> CascadeResult:
        """
        Delete every profile record of ``identity``, then the identity itself.

        Profile failures (query or per-record delete) are collected and logged
        but never stop the identity deletion, so the email stays registrable.
        An identity the provider no longer knows counts as deleted.

        Raises:
            IdentityProviderError: The identity could not be deleted
        """
        result = CascadeResult(identity_id=identity.uid)

        try:
            records = self.profile_store.find_by_identity(identity.uid)
        except Exception as exc:
            logger.exception("Profile lookup for %s failed during cascade", identity.uid)
            result.failures.append(str(exc))
            records = []

        if len(records) > 1:
            logger.warning("Account %s has %d profile records", identity.uid, len(records))

        for record in records:
            try:
                self.profile_store.delete(record.id)
                result.profiles_deleted += 1
            except Exception as exc:
                logger.exception("Failed to delete profile record %s", record.id)
                result.failures.append(str(exc))

        try:
            self.identity_provider.delete_user(identity.uid)
        except IdentityProviderError as exc:
            if exc.kind != IdentityErrorKind.NOT_FOUND:
                raise
            logger.warning("Account %s was already deleted", identity.uid)

        return result

    def _compensate(self, identity: AccountIdentity) -> bool:
        """Roll back a just-created account. Returns False if cleanup is incomplete."""
        try:
            result = self.cascade_delete(identity)
        except Exception:
            logger.exception(
                "Rollback of account %s failed; manual cleanup required", identity.uid
            )
            return False
        if not result.complete:
            logger.error(
                "Rollback of account %s left profile records behind: %s",
                identity.uid,
                result.failures,
            )
            return False
        logger.info("Rolled back account %s", identity.uid)
        return True

    def _lookup(self, email: str) -> AccountIdentity | None:
        try:
            return self.identity_provider.get_user_by_email(email)
        except IdentityProviderError as exc:
            if exc.kind == IdentityErrorKind.INVALID_EMAIL:
                raise InvalidEmailError() from exc
            logger.error("Account lookup for %s failed: %s", email, exc)
            raise

    def _create_identity(
        self, email: str, password: str, display_name: str | None
    ) -> AccountIdentity:
        try:
            return self.identity_provider.create_user(email, password, display_name)
        except IdentityProviderError as exc:
            if exc.kind == IdentityErrorKind.EMAIL_EXISTS:
                raise RegistrationInProgress() from exc
            if exc.kind == IdentityErrorKind.INVALID_EMAIL:
                raise InvalidEmailError() from exc
            if exc.kind == IdentityErrorKind.INVALID_ARGUMENT:
                raise ClientError(exc.message) from exc
            logger.error("Account creation for %s failed: %s", email, exc)
            raise

    def _create_profile(
        self, identity: AccountIdentity, policy: RolePolicy, payload: Mapping[str, Any]
    ) -> str:
        data = {
            "uid": identity.uid,
            "email": identity.email,
            "role": policy.role.value,
            **policy.build_profile(payload),
            "emailVerified": False,
        }
        return self.profile_store.add(data)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize and validate an email address.

        Applies: strip whitespace + lowercase, then syntax check (no DNS).
        """
        normalized = email.strip().lower()
        try:
            validate_email(normalized, check_deliverability=False)
        except EmailNotValidError as exc:
            raise InvalidEmailError() from exc
        return normalized
