"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from registrar import __version__
from registrar.api.dependencies import (
    close_services,
    close_state_store,
    init_services,
    init_state_store,
)
from registrar.api.models import APIResponse
from registrar.api.routes import auth, classes, enrollments
from registrar.api.security import SECURITY_HEADERS, security_middleware
from registrar.config import load_settings
from registrar.enrollment import ClassNotFoundError
from registrar.identity import (
    AuthenticationRequiredError,
    InvalidCredentialsError,
    RegistrationFailedError,
    WeakPasswordError,
)
from registrar.logging import sanitize_for_log
from registrar.rate_limit import RateLimitedError
from registrar.state_store import (
    EnrollmentNotFoundError,
    ServiceUnavailableError,
    StateStoreError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from registrar.config import Settings

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    store = init_state_store(settings)
    init_services(store, settings)
    logger.info("Registrar API started (db=%s)", settings.db_path)

    yield

    close_services()
    close_state_store()


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to short, generic responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _request: Request, _exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request data")

    @app.exception_handler(ValidationError)
    async def validation_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(WeakPasswordError)
    async def weak_password_handler(_request: Request, _exc: WeakPasswordError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, "Password does not meet strength requirements")

    @app.exception_handler(RegistrationFailedError)
    async def registration_failed_handler(
        _request: Request, exc: RegistrationFailedError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(AuthenticationRequiredError)
    async def authentication_required_handler(
        _request: Request, _exc: AuthenticationRequiredError
    ) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, "Authentication required")

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(
        _request: Request, _exc: InvalidCredentialsError
    ) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")

    @app.exception_handler(ClassNotFoundError)
    async def class_not_found_handler(_request: Request, _exc: ClassNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Class not found")

    @app.exception_handler(EnrollmentNotFoundError)
    async def enrollment_not_found_handler(
        _request: Request, _exc: EnrollmentNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Enrollment not found")

    @app.exception_handler(RateLimitedError)
    async def rate_limited_handler(_request: Request, exc: RateLimitedError) -> JSONResponse:
        return _error(status.HTTP_429_TOO_MANY_REQUESTS, str(exc))

    @app.exception_handler(ServiceUnavailableError)
    async def service_unavailable_handler(
        _request: Request, _exc: ServiceUnavailableError
    ) -> JSONResponse:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.exception_handler(StateStoreError)
    async def state_store_error_handler(_request: Request, _exc: StateStoreError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s: %s",
            request.method,
            request.url.path,
            sanitize_for_log(str(exc)),
        )
        # Runs outside the http middleware, so the security headers are added here
        response = _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
        response.headers.update(SECURITY_HEADERS)
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Runtime settings. Loaded from the environment when omitted.
    """
    app = FastAPI(
        title="Registrar API",
        description="REST API for student registration and class enrollment",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else load_settings()

    app.middleware("http")(security_middleware)
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(classes.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")

    return app
