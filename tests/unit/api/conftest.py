"""Fixtures for API route tests."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from registrar.api.app import register_exception_handlers
from registrar.api.dependencies import Services, build_services, get_services
from registrar.api.routes import auth, classes, enrollments
from registrar.api.security import security_middleware
from registrar.config import Settings
from registrar.state_store import StateStore

PASSWORD = "StrongPassword123!"
ADA = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "studentId": "stu-12345",
    "password": PASSWORD,
}


@pytest.fixture
def services(store: StateStore, settings: Settings) -> Services:
    return build_services(store, settings)


@pytest.fixture
def app(services: Services) -> FastAPI:
    """Create a test FastAPI app with the services dependency overridden."""
    app = FastAPI()

    def override_get_services() -> Iterator[Services]:
        yield services

    app.dependency_overrides[get_services] = override_get_services
    app.middleware("http")(security_middleware)
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(classes.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def logged_in(client: TestClient) -> TestClient:
    """Client holding a session cookie for a registered user."""
    assert client.post("/api/v1/register", json=ADA).status_code == 201
    response = client.post(
        "/api/v1/auth/login", json={"email": ADA["email"], "password": PASSWORD}
    )
    assert response.status_code == 200
    return client
