"""
Per-email advisory locks.

Serializes the lookup -> reclaim -> create sequence for one email address
within a process. Locks are reference-counted and dropped when the last
holder releases, so the registry does not grow with every email seen.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class EmailLocks:
    """Registry of re-entrant locks keyed by normalized email."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, tuple[threading.RLock, int]] = {}

    @contextmanager
    def hold(self, email: str) -> Iterator[None]:
        """Hold the lock for ``email`` for the duration of the block."""
        with self._guard:
            lock, holders = self._locks.get(email, (threading.RLock(), 0))
            self._locks[email] = (lock, holders + 1)

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                lock, holders = self._locks[email]
                if holders == 1:
                    del self._locks[email]
                else:
                    self._locks[email] = (lock, holders - 1)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
