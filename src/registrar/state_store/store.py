"""StateStore - Owns the database and the record repositories."""

from __future__ import annotations

from registrar.state_store.database import Database
from registrar.state_store.enrollments import EnrollmentRepository
from registrar.state_store.users import UserRepository


class StateStore:
    """Main entry point for persistent state.

    Holds two independent record collections: users keyed by normalized
    email, and enrollments keyed by generated id.
    """

    def __init__(self, db_path: str = "registrar.db", timeout_seconds: float = 5.0) -> None:
        """Initialize State Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
            timeout_seconds: Lock wait before a store call fails
        """
        self._db = Database(db_path, timeout_seconds=timeout_seconds)
        self._db.create_tables()
        self.users = UserRepository(self._db)
        self.enrollments = EnrollmentRepository(self._db)

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()
