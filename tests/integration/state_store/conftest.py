"""Fixtures for file-backed StateStore tests."""

import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from registrar.state_store import StateStore


def remove_db(path: str) -> None:
    Path(path).unlink(missing_ok=True)
    Path(f"{path}-wal").unlink(missing_ok=True)
    Path(f"{path}-shm").unlink(missing_ok=True)


@pytest.fixture
def temp_db_path() -> Iterator[str]:
    """Create a temporary database path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = f.name
    yield path
    remove_db(path)


@pytest.fixture
def store(temp_db_path: str) -> Iterator[StateStore]:
    """Create a StateStore with a temporary database."""
    s = StateStore(temp_db_path)
    yield s
    s.close()
