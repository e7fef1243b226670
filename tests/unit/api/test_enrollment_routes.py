"""Unit tests for enrollment routes."""

from dataclasses import replace
from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from registrar.config import Settings
from registrar.state_store import StateStore


def enroll(client: TestClient, class_id: str) -> httpx.Response:
    return client.post("/api/v1/enrollments", json={"classId": class_id, "action": "enroll"})


@pytest.mark.unit
class TestAuthenticationRequired:
    """Every enrollment route rejects unauthenticated callers."""

    def test_list(self, client: TestClient) -> None:
        """GET without a session gives 401."""
        assert client.get("/api/v1/enrollments").status_code == 401

    def test_enroll(self, client: TestClient, store: StateStore) -> None:
        """POST without a session gives 401 and writes nothing."""
        response = enroll(client, "1")

        assert response.status_code == 401
        assert store.enrollments.list_all() == []

    def test_unenroll(self, client: TestClient) -> None:
        """DELETE without a session gives 401."""
        response = client.request(
            "DELETE", "/api/v1/enrollments", json={"className": "Database Basics"}
        )

        assert response.status_code == 401

    def test_auth_checked_before_body(self, client: TestClient) -> None:
        """An unauthenticated request with a bad body still gives 401."""
        response = client.post("/api/v1/enrollments", json={"nonsense": True})

        assert response.status_code == 401


@pytest.mark.unit
class TestEnroll:
    """Tests for POST /api/v1/enrollments with action=enroll."""

    def test_enroll(self, logged_in: TestClient) -> None:
        """A new enrollment gives 201."""
        response = enroll(logged_in, "2")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["message"] == "Successfully enrolled in class"
        assert data["class_id"] == "2"
        assert data["class_name"] == "Database Basics"
        assert data["already_enrolled"] is False

    def test_enroll_twice(self, logged_in: TestClient) -> None:
        """Enrolling again succeeds with 200 and already_enrolled set."""
        enroll(logged_in, "2")

        response = enroll(logged_in, "2")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["already_enrolled"] is True
        assert data["message"] == "You are already enrolled in this class"

    def test_unknown_class(self, logged_in: TestClient) -> None:
        """Enrolling in a class outside the catalog gives 404."""
        response = enroll(logged_in, "99")

        assert response.status_code == 404
        assert response.json()["error"] == "Class not found"

    def test_invalid_action(self, logged_in: TestClient) -> None:
        """Unknown actions are rejected."""
        response = logged_in.post(
            "/api/v1/enrollments", json={"classId": "2", "action": "transfer"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data"

    @pytest.fixture
    def settings(self, settings: Settings) -> Settings:
        return replace(settings, api_max_attempts=2)

    def test_rate_limited(self, logged_in: TestClient) -> None:
        """Enrollment writes are limited per caller and origin."""
        enroll(logged_in, "1")
        enroll(logged_in, "2")

        response = enroll(logged_in, "3")

        assert response.status_code == 429
        assert response.json()["error"] == "Too many enrollment attempts. Please try again later."

    def test_unknown_classes_rate_limited(self, logged_in: TestClient) -> None:
        """Requests for unknown classes count toward the limit."""
        assert enroll(logged_in, "999").status_code == 404
        assert enroll(logged_in, "999").status_code == 404

        assert enroll(logged_in, "999").status_code == 429
        assert enroll(logged_in, "1").status_code == 429


@pytest.mark.unit
class TestListEnrollments:
    """Tests for GET /api/v1/enrollments."""

    def test_empty(self, logged_in: TestClient) -> None:
        """A new user has no enrollments."""
        response = logged_in.get("/api/v1/enrollments")

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_lists_active_only(self, logged_in: TestClient) -> None:
        """Dropped enrollments are not listed."""
        enroll(logged_in, "1")
        enroll(logged_in, "2")
        logged_in.post("/api/v1/enrollments", json={"classId": "1", "action": "unenroll"})

        data = logged_in.get("/api/v1/enrollments").json()["data"]

        assert [e["class_id"] for e in data] == ["2"]
        assert data[0]["status"] == "active"
        assert data[0]["email"] == "ada@example.com"
        assert datetime.fromisoformat(data[0]["enrolled_at"]).tzinfo is not None


@pytest.mark.unit
class TestUnenroll:
    """Tests for leaving a class."""

    def test_unenroll_action(self, logged_in: TestClient) -> None:
        """action=unenroll drops the enrollment with 200."""
        enroll(logged_in, "2")

        response = logged_in.post(
            "/api/v1/enrollments", json={"classId": "2", "action": "unenroll"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["message"] == "Successfully unenrolled from class"

    def test_delete_by_name(self, logged_in: TestClient) -> None:
        """DELETE drops by class display name."""
        enroll(logged_in, "2")

        response = logged_in.request(
            "DELETE", "/api/v1/enrollments", json={"className": "Database Basics"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["class_id"] == "2"
        assert logged_in.get("/api/v1/enrollments").json()["data"] == []

    def test_delete_not_enrolled(self, logged_in: TestClient) -> None:
        """Leaving a class the caller is not in gives 404."""
        response = logged_in.request(
            "DELETE", "/api/v1/enrollments", json={"className": "Database Basics"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Enrollment not found"

    def test_re_enroll_after_unenroll(self, logged_in: TestClient) -> None:
        """A dropped class can be joined again."""
        enroll(logged_in, "2")
        logged_in.request("DELETE", "/api/v1/enrollments", json={"className": "2"})

        response = enroll(logged_in, "2")

        assert response.status_code == 201
        assert response.json()["data"]["already_enrolled"] is False
