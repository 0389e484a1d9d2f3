"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory identity provider and profile store
- A mock email sender
- A registration service wired to the above
"""

from unittest.mock import Mock

import pytest

from src.adapters.identity.memory import InMemoryIdentityProvider
from src.adapters.profiles.memory import InMemoryProfileStore
from src.domain.registration import RegistrationService


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    """In-memory identity provider with a cheap bcrypt cost."""
    return InMemoryIdentityProvider(bcrypt_cost=4)


@pytest.fixture
def profiles() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def sender() -> Mock:
    """Email sender that accepts every message."""
    mock = Mock()
    mock.send.return_value = "msg-123"
    return mock


@pytest.fixture
def service(
    identity: InMemoryIdentityProvider, profiles: InMemoryProfileStore, sender: Mock
) -> RegistrationService:
    return RegistrationService(identity_provider=identity, profile_store=profiles, email_sender=sender)
