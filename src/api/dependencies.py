"""
FastAPI dependencies - Dependency injection factories.

This module builds the provider clients once per process and provides
Depends() factories that hand the resulting domain services to routes.
"""

import logging

from fastapi import Request

from src.adapters.identity.memory import InMemoryIdentityProvider
from src.adapters.mail.console import ConsoleEmailSender
from src.adapters.profiles.memory import InMemoryProfileStore
from src.config.settings import Settings
from src.domain.admin import AdminGate
from src.domain.ports import EmailSender, IdentityProvider, ProfileStore
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)


def build_identity_provider(settings: Settings) -> IdentityProvider:
    """Create the identity provider selected by IDENTITY_BACKEND."""
    if settings.identity_backend == "firebase":
        from src.adapters.firebase_app import init_firebase_app
        from src.adapters.identity.firebase import FirebaseIdentityProvider

        return FirebaseIdentityProvider(init_firebase_app(settings.firebase_service_account_json))
    logger.warning("Using in-memory identity provider - accounts are not persisted")
    return InMemoryIdentityProvider()


def build_profile_store(settings: Settings) -> ProfileStore:
    """Create the profile store selected by PROFILE_BACKEND."""
    if settings.profile_backend == "firestore":
        from src.adapters.firebase_app import init_firebase_app
        from src.adapters.profiles.firestore import FirestoreProfileStore

        app = init_firebase_app(settings.firebase_service_account_json)
        return FirestoreProfileStore(app, collection=settings.profile_collection)
    logger.warning("Using in-memory profile store - profiles are not persisted")
    return InMemoryProfileStore()


def build_email_sender(settings: Settings) -> EmailSender:
    """Create the email sender selected by EMAIL_BACKEND."""
    if settings.email_backend == "resend":
        from src.adapters.mail.resend_sender import ResendEmailSender

        sender = ResendEmailSender(
            api_key=settings.resend_api_key,
            from_address=settings.email_from,
            reply_to=settings.reply_to,
        )
        if not sender.is_configured():
            logger.warning("RESEND_API_KEY or EMAIL_FROM not set - every email send will fail")
        return sender
    return ConsoleEmailSender()


def build_registration_service(settings: Settings) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the identity provider, profile store and email sender.
    """
    return RegistrationService(
        identity_provider=build_identity_provider(settings),
        profile_store=build_profile_store(settings),
        email_sender=build_email_sender(settings),
        verification_continue_url=settings.verification_continue_url,
        password_reset_continue_url=settings.password_reset_continue_url,
    )


def get_registration_service(request: Request) -> RegistrationService:
    """
    Get the registration service from app state.

    The service is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.registration_service


def get_admin_gate(request: Request) -> AdminGate:
    """Get the admin PIN gate from app state."""
    return request.app.state.admin_gate
