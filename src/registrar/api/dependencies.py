"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from registrar.config import Settings
from registrar.enrollment import ClassCatalog, EnrollmentService
from registrar.identity import AuthService, Identity, SessionGate, SessionTokenCodec
from registrar.rate_limit import RateLimiter
from registrar.state_store import StateStore

SESSION_COOKIE = "registrar_session"


@dataclass
class Services:
    """Request-handling context shared by every route.

    Each limiter is its own instance with its own policy.
    """

    settings: Settings
    gate: SessionGate
    auth: AuthService
    enrollment: EnrollmentService
    catalog: ClassCatalog


# Global StateStore instance (initialized on app startup)
_state_store: StateStore | None = None


def init_state_store(settings: Settings) -> StateStore:
    """Initialize the global StateStore instance."""
    global _state_store  # noqa: PLW0603
    _state_store = StateStore(settings.db_path, timeout_seconds=settings.db_timeout_seconds)
    return _state_store


def close_state_store() -> None:
    """Close the global StateStore instance."""
    global _state_store  # noqa: PLW0603
    if _state_store is not None:
        _state_store.close()
        _state_store = None


# Global Services instance (initialized on app startup)
_services: Services | None = None


def build_services(store: StateStore, settings: Settings) -> Services:
    """Wire the identity and enrollment components for a store."""
    tokens = SessionTokenCodec(
        settings.session_secret, max_age_seconds=settings.session_max_age_seconds
    )
    auth = AuthService(
        users=store.users,
        tokens=tokens,
        login_limiter=RateLimiter(settings.auth_max_attempts, settings.auth_window_ms),
        registration_limiter=RateLimiter(settings.auth_max_attempts, settings.auth_window_ms),
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    catalog = ClassCatalog()
    enrollment = EnrollmentService(
        enrollments=store.enrollments,
        limiter=RateLimiter(settings.api_max_attempts, settings.api_window_ms),
        catalog=catalog,
    )
    return Services(
        settings=settings,
        gate=SessionGate(tokens, store.users),
        auth=auth,
        enrollment=enrollment,
        catalog=catalog,
    )


def init_services(store: StateStore, settings: Settings) -> Services:
    """Initialize the global Services instance."""
    global _services  # noqa: PLW0603
    _services = build_services(store, settings)
    return _services


def close_services() -> None:
    """Close the global Services instance."""
    global _services  # noqa: PLW0603
    _services = None


def get_services() -> Generator[Services, None, None]:
    """Dependency that provides the Services instance."""
    if _services is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    yield _services


ServicesDep = Annotated[Services, Depends(get_services)]


def session_token(request: Request) -> str | None:
    """Session proof from the cookie, falling back to a bearer header."""
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def get_current_identity(request: Request, services: ServicesDep) -> Identity:
    """Dependency that requires an authenticated caller."""
    return services.gate.require_auth(session_token(request))


CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]
