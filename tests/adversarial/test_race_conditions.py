"""
Adversarial tests for concurrent registration of the same email.

The reclaim step (delete the stale unverified account) and the create step
are two separate provider calls. Concurrent registrations for one email
must not interleave them, or one request could delete the identity another
request is still completing, leaving an orphaned profile behind.

Defense:
- In-process: per-email lock around lookup -> reclaim -> create -> email
- Across processes: the provider's unique-email create; the loser gets
  RegistrationInProgress instead of a second identity
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from src.adapters.identity.memory import InMemoryIdentityProvider
from src.adapters.profiles.memory import InMemoryProfileStore
from src.domain.exceptions import DependencyError, RegistrationInProgress
from src.domain.locks import EmailLocks
from src.domain.ports import Role
from src.domain.registration import RegistrationService
from tests.payloads import end_user_payload

# Apply adversarial marker to all tests in this module
pytestmark = pytest.mark.adversarial


def slow_sender(delay: float = 0.01) -> Mock:
    """Email sender that holds the request open to widen the race window."""

    def send(message):
        time.sleep(delay)
        return "msg"

    sender = Mock()
    sender.send.side_effect = send
    return sender


def assert_consistent(identity: InMemoryIdentityProvider, profiles: InMemoryProfileStore) -> None:
    """Every identity has exactly one profile and no profile is orphaned."""
    uids = {u.uid for u in identity.list_users()}
    records = profiles.all()
    for uid in uids:
        assert len([r for r in records if r.data["uid"] == uid]) == 1
    orphans = [r for r in records if r.data["uid"] not in uids]
    assert orphans == [], f"Orphaned profile records: {orphans}"


class TestConcurrentReclaim:
    """Concurrent registrations in one process."""

    def test_concurrent_registration_same_email_stays_consistent(self) -> None:
        identity = InMemoryIdentityProvider(bcrypt_cost=4)
        profiles = InMemoryProfileStore()
        service = RegistrationService(
            identity_provider=identity, profile_store=profiles, email_sender=slow_sender()
        )
        num_requests = 8
        results: list[str] = []
        results_lock = threading.Lock()

        def register() -> None:
            message = service.register(Role.END_USER, end_user_payload())
            with results_lock:
                results.append(message)

        with ThreadPoolExecutor(max_workers=num_requests) as executor:
            futures = [executor.submit(register) for _ in range(num_requests)]
            for f in futures:
                f.result()

        # Requests are serialized: each reclaims the previous unverified account
        assert len(results) == num_requests
        users = identity.list_users()
        assert len(users) == 1, f"{len(users)} identities for one email (expected 1)"
        assert_consistent(identity, profiles)
        assert len(service.locks) == 0

    def test_concurrent_registration_against_pending_account(self) -> None:
        identity = InMemoryIdentityProvider(bcrypt_cost=4)
        profiles = InMemoryProfileStore()
        service = RegistrationService(
            identity_provider=identity, profile_store=profiles, email_sender=slow_sender()
        )
        service.register(Role.END_USER, end_user_payload())
        stale_uid = identity.get_user_by_email("a@x.com").uid

        with ThreadPoolExecutor(max_workers=4) as executor:
            futures = [
                executor.submit(service.register, Role.END_USER, end_user_payload())
                for _ in range(4)
            ]
            for f in futures:
                f.result()

        assert identity.get_user_by_email("a@x.com").uid != stale_uid
        assert profiles.find_by_identity(stale_uid) == []
        assert_consistent(identity, profiles)

    def test_different_emails_do_not_block_each_other(self) -> None:
        identity = InMemoryIdentityProvider(bcrypt_cost=4)
        profiles = InMemoryProfileStore()
        service = RegistrationService(
            identity_provider=identity, profile_store=profiles, email_sender=slow_sender()
        )
        emails = [f"user{i}@x.com" for i in range(6)]

        with ThreadPoolExecutor(max_workers=len(emails)) as executor:
            futures = [
                executor.submit(service.register, Role.END_USER, end_user_payload(email=e))
                for e in emails
            ]
            for f in futures:
                f.result()

        assert sorted(u.email for u in identity.list_users()) == sorted(emails)
        assert_consistent(identity, profiles)


class TestCrossProcessCreate:
    """Separate lock registries stand in for separate processes."""

    def test_provider_uniqueness_allows_at_most_one_identity(self) -> None:
        identity = InMemoryIdentityProvider(bcrypt_cost=4)
        profiles = InMemoryProfileStore()
        services = [
            RegistrationService(
                identity_provider=identity,
                profile_store=profiles,
                email_sender=slow_sender(),
                locks=EmailLocks(),
            )
            for _ in range(2)
        ]
        barrier = threading.Barrier(len(services))
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def register(service: RegistrationService) -> None:
            barrier.wait()
            try:
                service.register(Role.END_USER, end_user_payload())
                outcome = "ok"
            except RegistrationInProgress:
                outcome = "in_progress"
            except DependencyError:
                # Lost its identity to the other process mid-flight and rolled back
                outcome = "rolled_back"
            with outcomes_lock:
                outcomes.append(outcome)

        with ThreadPoolExecutor(max_workers=len(services)) as executor:
            futures = [executor.submit(register, s) for s in services]
            for f in futures:
                f.result()

        assert "ok" in outcomes
        assert len(identity.list_users()) <= 1
