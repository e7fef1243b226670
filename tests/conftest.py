"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator

import pytest

from registrar.config import Settings
from registrar.state_store import StateStore

TEST_SECRET = "test-session-secret-with-at-least-32-chars"


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture
def settings() -> Settings:
    """Settings for an in-memory database and cheap password hashing."""
    return Settings(
        db_path=":memory:",
        session_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def store() -> Iterator[StateStore]:
    """Create an in-memory StateStore."""
    s = StateStore(":memory:")
    yield s
    s.close()
