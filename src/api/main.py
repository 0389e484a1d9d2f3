"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from src.api.dependencies import build_registration_service
from src.api.routes import router
from src.config.settings import Settings, get_settings
from src.domain.admin import AdminGate
from src.domain.exceptions import (
    DependencyError,
    EmailDeliveryError,
    MissingFieldsError,
    RegistrationError,
)

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "accounts",
        "description": "Account registration, password reset and cleanup",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Builds the provider clients and domain services once on startup.
    Services already present in app.state (e.g. test fakes) are kept.
    """
    settings: Settings = app.state.settings

    logger.info("Starting application...")
    if getattr(app.state, "registration_service", None) is None:
        logger.info(
            "Wiring adapters (identity=%s, profiles=%s, email=%s)",
            settings.identity_backend,
            settings.profile_backend,
            settings.email_backend,
        )
        app.state.registration_service = build_registration_service(settings)
    if getattr(app.state, "admin_gate", None) is None:
        if not settings.admin_pin:
            logger.warning("ADMIN_PIN not set - admin login is disabled")
        app.state.admin_gate = AdminGate(pin=settings.admin_pin)
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


def _status_for(exc: RegistrationError) -> int:
    if isinstance(exc, EmailDeliveryError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, DependencyError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="schoolchow-accounts",
        description="Account registration and email verification API for end users, vendors and riders",
        version="1.0.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.include_router(router)

    @app.exception_handler(RegistrationError)
    async def registration_error_handler(request: Request, exc: RegistrationError) -> JSONResponse:
        """Map domain error families onto HTTP statuses with an ``error`` body."""
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        content: dict = {"error": exc.message}
        if isinstance(exc, MissingFieldsError):
            content["missing"] = exc.fields
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body."},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s failed unexpectedly", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error. Please try again."},
        )

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "OK"

    @app.get("/healthz", response_class=PlainTextResponse)
    async def health_check() -> str:
        """Liveness probe. Always 200; does not touch external systems."""
        return "ok"

    return app


app = create_app()


def main() -> None:
    """Run the service with uvicorn."""
    settings = get_settings()
    logger.info("Starting server on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "src.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
