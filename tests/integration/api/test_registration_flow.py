"""Integration tests for the full application."""

from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from registrar.api import create_app
from registrar.config import Settings
from registrar.state_store import StateStore, User

ADA = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "studentId": "STU-12345",
    "password": "StrongPassword123!",
}
GRACE = {
    "name": "Grace Hopper",
    "email": "grace@example.com",
    "studentId": "STU-67890",
    "password": "AnotherPass456$",
}


@pytest.fixture
def db_settings(settings: Settings, tmp_path: Path) -> Settings:
    return replace(settings, db_path=str(tmp_path / "registrar.db"))


@pytest.fixture
def client(db_settings: Settings) -> Iterator[TestClient]:
    """Client for an app whose lifespan has started."""
    with TestClient(create_app(db_settings), raise_server_exceptions=False) as c:
        yield c


def login(client: TestClient, user: dict[str, str]) -> None:
    response = client.post(
        "/api/v1/auth/login", json={"email": user["email"], "password": user["password"]}
    )
    assert response.status_code == 200


@pytest.mark.integration
class TestStudentJourney:
    """End-to-end flows through create_app."""

    def test_register_login_enroll_drop(self, client: TestClient) -> None:
        """A student registers, logs in, enrolls, lists and drops."""
        assert client.post("/api/v1/register", json=ADA).status_code == 201
        login(client, ADA)

        classes = client.get("/api/v1/classes").json()["data"]
        assert len(classes) == 3

        assert client.post(
            "/api/v1/enrollments", json={"classId": "1", "action": "enroll"}
        ).status_code == 201
        assert client.post(
            "/api/v1/enrollments", json={"classId": "3", "action": "enroll"}
        ).status_code == 201

        listed = client.get("/api/v1/enrollments").json()["data"]
        assert sorted(e["class_id"] for e in listed) == ["1", "3"]

        response = client.request(
            "DELETE", "/api/v1/enrollments", json={"className": "Web Development 101"}
        )
        assert response.status_code == 200

        listed = client.get("/api/v1/enrollments").json()["data"]
        assert [e["class_id"] for e in listed] == ["3"]

        client.post("/api/v1/auth/logout")
        assert client.get("/api/v1/enrollments").status_code == 401

    def test_students_are_isolated(self, client: TestClient) -> None:
        """One student can neither see nor drop another's enrollments."""
        client.post("/api/v1/register", json=ADA)
        client.post("/api/v1/register", json=GRACE)

        login(client, ADA)
        client.post("/api/v1/enrollments", json={"classId": "2", "action": "enroll"})
        client.post("/api/v1/auth/logout")

        login(client, GRACE)
        assert client.get("/api/v1/enrollments").json()["data"] == []
        response = client.request("DELETE", "/api/v1/enrollments", json={"className": "2"})
        assert response.status_code == 404
        client.post("/api/v1/auth/logout")

        login(client, ADA)
        listed = client.get("/api/v1/enrollments").json()["data"]
        assert [e["class_id"] for e in listed] == ["2"]

    def test_data_survives_restart(self, db_settings: Settings) -> None:
        """Users and enrollments persist across application restarts."""
        with TestClient(create_app(db_settings)) as first:
            first.post("/api/v1/register", json=ADA)
            login(first, ADA)
            first.post("/api/v1/enrollments", json={"classId": "2", "action": "enroll"})

        with TestClient(create_app(db_settings)) as second:
            login(second, ADA)
            listed = second.get("/api/v1/enrollments").json()["data"]

        assert [e["class_id"] for e in listed] == ["2"]

    def test_session_survives_restart_with_same_secret(self, db_settings: Settings) -> None:
        """A token issued before a restart is honored after it."""
        with TestClient(create_app(db_settings)) as first:
            first.post("/api/v1/register", json=ADA)
            token = first.post(
                "/api/v1/auth/login",
                json={"email": ADA["email"], "password": ADA["password"]},
            ).json()["data"]["token"]

        with TestClient(create_app(db_settings)) as second:
            response = second.get(
                "/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"}
            )

        assert response.status_code == 200

    def test_deleted_user_loses_session(self, db_settings: Settings) -> None:
        """A valid token for a user missing from the store is refused."""
        with TestClient(create_app(db_settings)) as c:
            c.post("/api/v1/register", json=ADA)
            login(c, ADA)

            store = StateStore(db_settings.db_path)
            session = store._db.get_session()
            session.delete(session.get(User, "ada@example.com"))
            session.commit()
            session.close()
            store.close()

            assert c.get("/api/v1/auth/session").status_code == 401
