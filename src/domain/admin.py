"""
Admin gate - Shared-secret PIN check.
"""

import secrets
from dataclasses import dataclass

from .exceptions import MissingFieldsError


@dataclass
class AdminGate:
    """Compares a submitted PIN against the configured one."""

    pin: str | None = None

    def verify(self, pin: str | None) -> bool:
        """
        Check a submitted PIN.

        An unconfigured gate refuses every PIN.

        Raises:
            MissingFieldsError: No PIN submitted
        """
        if not pin:
            raise MissingFieldsError("Admin PIN is required.", ["pin"])
        if not self.pin:
            return False
        return secrets.compare_digest(pin.encode(), self.pin.encode())
