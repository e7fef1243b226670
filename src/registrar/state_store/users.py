"""UserRepository - create and look up user records by email."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from registrar.state_store.exceptions import (
    ServiceUnavailableError,
    UserExistsError,
    ValidationError,
)
from registrar.state_store.models import User
from registrar.state_store.validation import (
    validate_email,
    validate_name,
    validate_student_id,
)

if TYPE_CHECKING:
    from registrar.state_store.database import Database

logger = logging.getLogger(__name__)


class UserRepository:
    """User records keyed by normalized email.

    Every read goes to the database; nothing is cached.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def create(self, email: str, password_hash: str, name: str, student_id: str) -> User:
        """Create a new user.

        The insert is keyed on the normalized email, so two concurrent
        registrations for the same address cannot both succeed.

        Args:
            email: Email address; normalized before storage.
            password_hash: Opaque credential hash. Never logged.
            name: Display name, 2-50 letters, spaces, hyphens or apostrophes.
            student_id: Student ID, 5-20 letters, digits or hyphens.

        Returns:
            The created User.

        Raises:
            ValidationError: If any field is malformed.
            UserExistsError: If a user with this email already exists.
            ServiceUnavailableError: If the database fails.
        """
        normalized_email = validate_email(email)
        clean_name = validate_name(name)
        clean_student_id = validate_student_id(student_id)
        if not password_hash or not isinstance(password_hash, str):
            raise ValidationError("Password hash is required")

        session = self._db.get_session()
        try:
            user = User(
                email=normalized_email,
                password_hash=password_hash,
                name=clean_name,
                student_id=clean_student_id,
            )
            session.add(user)
            session.commit()
            logger.info("User created: %s", normalized_email)
            return user
        except IntegrityError as e:
            session.rollback()
            raise UserExistsError("User already exists") from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("User create failed: %s", type(e).__name__)
            raise ServiceUnavailableError("Service temporarily unavailable") from e
        finally:
            session.close()

    def get_by_email(self, email: str) -> User | None:
        """Get a user by email.

        Args:
            email: Email address; normalized before lookup.

        Returns:
            The User, or None if absent or the email is malformed.

        Raises:
            ServiceUnavailableError: If the database fails.
        """
        try:
            normalized_email = validate_email(email)
        except ValidationError:
            return None

        session = self._db.get_session()
        try:
            return session.get(User, normalized_email)
        except SQLAlchemyError as e:
            logger.error("User lookup failed: %s", type(e).__name__)
            raise ServiceUnavailableError("Service temporarily unavailable") from e
        finally:
            session.close()
