"""
Role policies - Required fields and profile layout per account role.

Each role differs only in which payload fields are mandatory, which field
names the account, and how the profile document is shaped. The lifecycle
itself is shared and lives in registration.py.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .ports import Role

Payload = Mapping[str, Any]


@dataclass(frozen=True)
class RolePolicy:
    """Registration policy for a single role."""

    role: Role
    required_fields: tuple[str, ...]
    missing_fields_message: str
    success_message: str
    build_profile: Callable[[Payload], dict[str, Any]]
    # Payload field used as the provider display name (None: no display name)
    display_name_field: str | None
    # Payload field used to greet the user in the verification email
    greeting_field: str

    def missing_fields(self, payload: Payload) -> list[str]:
        """Return required fields that are absent, None, or blank strings."""
        missing = []
        for name in self.required_fields:
            value = payload.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def display_name(self, payload: Payload) -> str | None:
        if self.display_name_field is None:
            return None
        return payload.get(self.display_name_field)


def _end_user_profile(payload: Payload) -> dict[str, Any]:
    return {
        "firstname": payload["username"],
        "surname": payload.get("surname") or "",
        "phoneno": payload.get("phoneno") or "",
        "school": payload.get("school") or "",
        "ordernumber": 0,
        "totalorder": 0,
        "debt": 0,
    }


def _vendor_profile(payload: Payload) -> dict[str, Any]:
    return {
        "phoneno": payload["phoneno"],
        "surname": payload["surname"],
        "firstname": payload["firstname"],
        "profilepic": payload["profilepic"],
        "school": payload["selectedSchool"],
        "address": payload["address"],
        "businessname": payload["businessname"],
        "businesscategory": payload["businessCategory"],
        "now": "open",
        "balance": 0,
    }


def _rider_profile(payload: Payload) -> dict[str, Any]:
    return {
        "phoneno": payload["phoneno"],
        "surname": payload["surname"],
        "firstname": payload["firstname"],
        "school": payload["school"],
        "address": payload["address"],
        "balance": 0,
    }


END_USER = RolePolicy(
    role=Role.END_USER,
    required_fields=("email", "password", "username"),
    missing_fields_message="Please provide email, password, and username.",
    success_message="User registered successfully. Verification email sent.",
    build_profile=_end_user_profile,
    display_name_field="username",
    greeting_field="username",
)

VENDOR = RolePolicy(
    role=Role.VENDOR,
    required_fields=(
        "email",
        "password",
        "phoneno",
        "surname",
        "firstname",
        "businessname",
        "businessCategory",
        "selectedSchool",
        "address",
        "profilepic",
    ),
    missing_fields_message="Please fill in all fields for vendor registration.",
    success_message="Vendor registered successfully. Verification email sent.",
    build_profile=_vendor_profile,
    display_name_field="firstname",
    greeting_field="firstname",
)

RIDER = RolePolicy(
    role=Role.RIDER,
    required_fields=("email", "password", "phoneno", "surname", "firstname", "school", "address"),
    missing_fields_message="Please fill in all fields for rider registration.",
    success_message="Rider registered successfully. Verification email sent.",
    build_profile=_rider_profile,
    display_name_field=None,
    greeting_field="firstname",
)

POLICIES: dict[Role, RolePolicy] = {p.role: p for p in (END_USER, VENDOR, RIDER)}


def policy_for(role: Role) -> RolePolicy:
    """Get the registration policy for a role."""
    return POLICIES[role]
