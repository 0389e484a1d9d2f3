"""
API routes - Registration, password reset, cleanup and admin endpoints.

This module defines the HTTP endpoints:
- POST /register - Register an end user
- POST /vendor/register - Register a vendor
- POST /rider/register - Register a rider
- POST /forgot-password - Send a password reset link
- DELETE /delete-unverified - Purge an unverified account
- POST /admin/login - Check the admin PIN

Domain errors raised here are rendered by the handlers in main.py.
Handlers are plain ``def`` so blocking provider calls run in the threadpool.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.dependencies import get_admin_gate, get_registration_service
from src.api.models import (
    AdminLoginRequest,
    AdminLoginResponse,
    EmailRequest,
    ErrorResponse,
    MessageResponse,
    RegisterRequest,
    RiderRegisterRequest,
    VendorRegisterRequest,
)
from src.domain.admin import AdminGate
from src.domain.ports import Role
from src.domain.registration import RegistrationService

router = APIRouter(tags=["accounts"])

_REGISTER_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing fields, bad email or verified email"},
    500: {"model": ErrorResponse, "description": "Identity provider or profile store failure"},
    502: {"model": ErrorResponse, "description": "Verification email could not be delivered"},
}


def _fields(payload: BaseModel | None) -> dict:
    return payload.model_dump() if payload is not None else {}


@router.post(
    "/register",
    response_model=MessageResponse,
    responses=_REGISTER_RESPONSES,
    summary="Register an end user",
    description="Create an unverified end-user account and email a verification link. "
    "An unverified account for the same email is replaced.",
)
def register_user(
    payload: RegisterRequest | None = None,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    return MessageResponse(message=service.register(Role.END_USER, _fields(payload)))


@router.post(
    "/vendor/register",
    response_model=MessageResponse,
    responses=_REGISTER_RESPONSES,
    summary="Register a vendor",
)
def register_vendor(
    payload: VendorRegisterRequest | None = None,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    return MessageResponse(message=service.register(Role.VENDOR, _fields(payload)))


@router.post(
    "/rider/register",
    response_model=MessageResponse,
    responses=_REGISTER_RESPONSES,
    summary="Register a rider",
)
def register_rider(
    payload: RiderRegisterRequest | None = None,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    return MessageResponse(message=service.register(Role.RIDER, _fields(payload)))


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown, unverified or malformed email"},
        502: {"model": ErrorResponse, "description": "Reset email could not be delivered"},
    },
    summary="Send a password reset link",
)
def forgot_password(
    payload: EmailRequest | None = None,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    email = payload.email if payload is not None else None
    return MessageResponse(message=service.request_password_reset(email))


@router.delete(
    "/delete-unverified",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse, "description": "Missing email or already verified"}},
    summary="Delete an unverified account",
)
def delete_unverified(
    payload: EmailRequest | None = None,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    email = payload.email if payload is not None else None
    return MessageResponse(message=service.delete_unverified(email))


@router.post(
    "/admin/login",
    response_model=AdminLoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "PIN missing"},
        401: {"description": "Invalid PIN"},
    },
    summary="Check the admin PIN",
)
def admin_login(
    payload: AdminLoginRequest | None = None,
    gate: AdminGate = Depends(get_admin_gate),
):
    pin = payload.pin if payload is not None else None
    if gate.verify(pin):
        return AdminLoginResponse(success=True, message="PIN verified.")
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "error": "Invalid PIN."},
    )
