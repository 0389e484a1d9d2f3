"""
Unit tests for domain ports and exceptions.

Tests verify:
- Port types and enums are properly defined
- Exceptions are properly structured into the error taxonomy
- Domain purity (zero framework imports)
"""

import subprocess
from enum import Enum
from pathlib import Path

import pytest

from src.domain.exceptions import (
    AccountAlreadyVerified,
    AccountNotFound,
    ClientError,
    ConflictError,
    DependencyError,
    EmailAlreadyVerified,
    EmailDeliveryError,
    EmailNotVerified,
    IdentityProviderError,
    InvalidEmailError,
    MissingFieldsError,
    NotFoundError,
    ProfileStoreError,
    RegistrationError,
    RegistrationInProgress,
    VerificationEmailFailed,
)
from src.domain.ports import AccountIdentity, IdentityErrorKind, ProfileRecord, Role

DOMAIN_DIR = Path(__file__).resolve().parents[2] / "src" / "domain"


class TestRoleEnum:
    def test_role_values(self) -> None:
        assert issubclass(Role, Enum)
        assert [r.value for r in Role] == ["end_user", "vendor", "rider"]

    def test_role_is_str(self) -> None:
        assert Role.VENDOR == "vendor"


class TestIdentityErrorKind:
    def test_kinds(self) -> None:
        assert {k.name for k in IdentityErrorKind} == {
            "NOT_FOUND",
            "INVALID_EMAIL",
            "EMAIL_EXISTS",
            "INVALID_ARGUMENT",
            "UNAVAILABLE",
        }

    def test_default_kind_is_unavailable(self) -> None:
        assert IdentityProviderError("boom").kind == IdentityErrorKind.UNAVAILABLE


class TestDataTypes:
    def test_account_identity_defaults_unverified(self) -> None:
        account = AccountIdentity(uid="u", email="a@x.com")
        assert account.email_verified is False
        assert account.display_name is None

    def test_account_identity_is_frozen(self) -> None:
        account = AccountIdentity(uid="u", email="a@x.com")
        with pytest.raises(AttributeError):
            account.email_verified = True  # type: ignore[misc]

    def test_profile_record_identity_id(self) -> None:
        assert ProfileRecord(id="d", data={"uid": "u"}).identity_id == "u"
        assert ProfileRecord(id="d").identity_id is None


class TestExceptionTaxonomy:
    """Each concrete error belongs to exactly one family."""

    @pytest.mark.parametrize(
        ("error", "family"),
        [
            (MissingFieldsError("m", ["email"]), ClientError),
            (InvalidEmailError(), ClientError),
            (EmailAlreadyVerified(), ConflictError),
            (AccountAlreadyVerified(), ConflictError),
            (EmailNotVerified(), ConflictError),
            (RegistrationInProgress(), ConflictError),
            (AccountNotFound(), NotFoundError),
            (IdentityProviderError("x"), DependencyError),
            (ProfileStoreError("x"), DependencyError),
            (EmailDeliveryError("x"), DependencyError),
            (VerificationEmailFailed(), EmailDeliveryError),
        ],
    )
    def test_family(self, error: RegistrationError, family: type) -> None:
        assert isinstance(error, family)
        assert isinstance(error, RegistrationError)

    def test_message_is_str(self) -> None:
        error = AccountNotFound()
        assert str(error) == error.message == "No user found with this email address."

    def test_verification_email_failed_defaults_compensated(self) -> None:
        assert VerificationEmailFailed().compensated is True
        assert VerificationEmailFailed(compensated=False).compensated is False

    def test_missing_fields_carries_fields(self) -> None:
        assert MissingFieldsError("m", ["a", "b"]).fields == ["a", "b"]


class TestDomainPurity:
    """Tests for domain purity - zero framework imports."""

    @pytest.mark.parametrize(
        "pattern",
        [
            "from fastapi",
            "import fastapi",
            "from pydantic",
            "import pydantic",
            "firebase_admin",
            "google.cloud",
            "import resend",
        ],
    )
    def test_no_framework_imports_in_domain(self, pattern: str) -> None:
        result = subprocess.run(
            ["grep", "-r", pattern, str(DOMAIN_DIR)],
            capture_output=True,
            text=True,
        )
        assert result.returncode != 0, f"{pattern} found: {result.stdout}"
