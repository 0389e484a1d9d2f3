"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account provisioning lifecycle: registration
per role, password reset, and cascade cleanup of unverified accounts.
It defines its own port interfaces for the identity provider, profile
store and email dispatcher, keeping the hexagonal architecture decoupled.
"""

from .admin import AdminGate
from .exceptions import (
    ClientError,
    ConflictError,
    DependencyError,
    EmailDeliveryError,
    NotFoundError,
    RegistrationError,
    VerificationEmailFailed,
)
from .ports import (
    AccountIdentity,
    EmailMessage,
    EmailSender,
    IdentityErrorKind,
    IdentityProvider,
    ProfileRecord,
    ProfileStore,
    Role,
)
from .registration import CascadeResult, RegistrationService

__all__ = [
    "AccountIdentity",
    "AdminGate",
    "CascadeResult",
    "ClientError",
    "ConflictError",
    "DependencyError",
    "EmailDeliveryError",
    "EmailMessage",
    "EmailSender",
    "IdentityErrorKind",
    "IdentityProvider",
    "NotFoundError",
    "ProfileRecord",
    "ProfileStore",
    "RegistrationError",
    "RegistrationService",
    "Role",
    "VerificationEmailFailed",
]
