"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are all optional here: presence of role-required fields is
checked by the domain so every missing-field case gets the same 400 message.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Request(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class RegisterRequest(_Request):
    """Request model for end-user registration."""

    email: str | None = None
    password: str | None = None
    username: str | None = None
    surname: str | None = None
    phoneno: str | None = None
    school: str | None = None


class VendorRegisterRequest(_Request):
    """Request model for vendor registration. Every field is required."""

    email: str | None = None
    password: str | None = None
    phoneno: str | None = None
    surname: str | None = None
    firstname: str | None = None
    businessname: str | None = None
    businessCategory: str | None = None
    selectedSchool: str | None = None
    address: str | None = None
    profilepic: str | None = Field(None, description="URL of a pre-uploaded profile image")


class RiderRegisterRequest(_Request):
    """Request model for rider registration. Every field is required."""

    email: str | None = None
    password: str | None = None
    phoneno: str | None = None
    surname: str | None = None
    firstname: str | None = None
    school: str | None = None
    address: str | None = None


class EmailRequest(_Request):
    """Request model for password reset and unverified-account cleanup."""

    email: str | None = None


class AdminLoginRequest(_Request):
    """Request model for admin PIN login."""

    pin: str | None = None


class MessageResponse(BaseModel):
    """Response model for successful operations."""

    message: str


class AdminLoginResponse(BaseModel):
    """Response model for admin PIN login."""

    success: bool
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    missing: list[str] | None = None
