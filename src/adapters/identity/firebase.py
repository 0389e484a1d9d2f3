"""
Firebase identity adapter - Implements IdentityProvider protocol.

Wraps firebase_admin.auth. Firebase signals failures through a family of
exception classes and client-side ValueErrors; this module is the only
place that knows them. Everything leaving it is either a domain value or
an IdentityProviderError tagged with an IdentityErrorKind.
"""

import logging

import firebase_admin
from firebase_admin import auth
from firebase_admin import exceptions as firebase_exceptions

from src.domain.exceptions import IdentityProviderError
from src.domain.ports import AccountIdentity, IdentityErrorKind

logger = logging.getLogger(__name__)


def _to_identity(record: auth.UserRecord) -> AccountIdentity:
    return AccountIdentity(
        uid=record.uid,
        email=record.email,
        email_verified=bool(record.email_verified),
        display_name=record.display_name,
    )


def _translate(exc: Exception, invalid: IdentityErrorKind) -> IdentityProviderError:
    """Map a firebase_admin exception onto a provider-neutral error kind."""
    if isinstance(exc, auth.UserNotFoundError):
        kind = IdentityErrorKind.NOT_FOUND
    elif isinstance(exc, auth.EmailAlreadyExistsError):
        kind = IdentityErrorKind.EMAIL_EXISTS
    elif isinstance(exc, (ValueError, firebase_exceptions.InvalidArgumentError)):
        kind = invalid
    else:
        kind = IdentityErrorKind.UNAVAILABLE
    return IdentityProviderError(str(exc), kind=kind)


class FirebaseIdentityProvider:
    """
    Implements IdentityProvider protocol via firebase_admin.auth.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        """
        Initialize provider.

        Args:
            app: Firebase app to use (default app when None)
        """
        self._app = app

    def get_user_by_email(self, email: str) -> AccountIdentity | None:
        try:
            record = auth.get_user_by_email(email, app=self._app)
        except auth.UserNotFoundError:
            return None
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise _translate(exc, IdentityErrorKind.INVALID_EMAIL) from exc
        return _to_identity(record)

    def create_user(
        self, email: str, password: str, display_name: str | None = None
    ) -> AccountIdentity:
        kwargs = {"email": email, "password": password, "app": self._app}
        if display_name:
            kwargs["display_name"] = display_name
        try:
            record = auth.create_user(**kwargs)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise _translate(exc, IdentityErrorKind.INVALID_ARGUMENT) from exc
        logger.info("Created Firebase user %s", record.uid)
        return _to_identity(record)

    def delete_user(self, uid: str) -> None:
        try:
            auth.delete_user(uid, app=self._app)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise _translate(exc, IdentityErrorKind.INVALID_ARGUMENT) from exc
        logger.info("Deleted Firebase user %s", uid)

    def generate_email_verification_link(self, email: str, continue_url: str) -> str:
        settings = auth.ActionCodeSettings(url=continue_url, handle_code_in_app=False)
        try:
            return auth.generate_email_verification_link(
                email, action_code_settings=settings, app=self._app
            )
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise _translate(exc, IdentityErrorKind.INVALID_EMAIL) from exc

    def generate_password_reset_link(self, email: str, continue_url: str) -> str:
        settings = auth.ActionCodeSettings(url=continue_url, handle_code_in_app=False)
        try:
            return auth.generate_password_reset_link(
                email, action_code_settings=settings, app=self._app
            )
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise _translate(exc, IdentityErrorKind.INVALID_EMAIL) from exc
