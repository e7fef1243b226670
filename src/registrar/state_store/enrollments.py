"""EnrollmentRepository - create, query and drop enrollment records."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from registrar.state_store.exceptions import (
    AlreadyEnrolledError,
    EnrollmentNotFoundError,
    ServiceUnavailableError,
)
from registrar.state_store.models import (
    Enrollment,
    EnrollmentStatus,
    make_enrollment_id,
    utcnow,
)
from registrar.state_store.validation import (
    normalize_email,
    validate_class_id,
    validate_class_name,
    validate_email,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.orm import Session

    from registrar.state_store.database import Database

logger = logging.getLogger(__name__)


def matches_class(enrollment: Enrollment, class_id_or_name: str) -> bool:
    """Whether an enrollment is for the class named by an id or display name.

    Class ids and display names are interchangeable lookup keys.
    """
    return class_id_or_name in (enrollment.class_id, enrollment.class_name)


def active_only(enrollments: Iterable[Enrollment]) -> list[Enrollment]:
    """Filter enrollments down to the active ones, keeping their order."""
    return [e for e in enrollments if e.status == EnrollmentStatus.ACTIVE.value]


class EnrollmentRepository:
    """Enrollment records keyed by generated id.

    Lookups by owner scan the email column and filter status in Python,
    which keeps them correct regardless of any secondary index.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def enroll(self, email: str, class_name: str, class_id: str) -> Enrollment:
        """Create an active enrollment.

        Checks for an existing active enrollment first, then inserts a new
        record whose id must not already exist. The check and the insert are
        separate steps; the database's active-enrollment constraint rejects
        the insert if a concurrent request wins in between.

        Args:
            email: Owner email; normalized before storage.
            class_name: Display name of the class at enrollment time.
            class_id: Catalog id of the class.

        Returns:
            The created Enrollment.

        Raises:
            ValidationError: If any field is malformed.
            AlreadyEnrolledError: If an active enrollment already exists.
            ServiceUnavailableError: If the database fails.
        """
        normalized_email = validate_email(email)
        validate_class_id(class_id)
        validate_class_name(class_name)

        if self.is_enrolled(normalized_email, class_id):
            raise AlreadyEnrolledError("Already enrolled in this class")

        session = self._db.get_session()
        try:
            enrolled_at = utcnow()
            enrollment = Enrollment(
                email=normalized_email,
                class_id=class_id,
                class_name=class_name,
                id=self._free_id(session, normalized_email, class_id, enrolled_at),
                enrolled_at=enrolled_at,
            )
            session.add(enrollment)
            session.commit()
            logger.info("Enrollment created: %s in class %s", normalized_email, class_id)
            return enrollment
        except IntegrityError as e:
            session.rollback()
            logger.info("Enrollment insert rejected for class %s", class_id)
            raise AlreadyEnrolledError("Already enrolled in this class") from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Enrollment create failed: %s", type(e).__name__)
            raise ServiceUnavailableError("Service temporarily unavailable") from e
        finally:
            session.close()

    @staticmethod
    def _free_id(session: Session, email: str, class_id: str, at: datetime) -> str:
        # Ids carry millisecond precision; a re-enroll within the same
        # millisecond as an earlier record takes the next free millisecond.
        enrollment_id = make_enrollment_id(email, class_id, at)
        while session.get(Enrollment, enrollment_id) is not None:
            at += timedelta(milliseconds=1)
            enrollment_id = make_enrollment_id(email, class_id, at)
        return enrollment_id

    def _scan_for_email(self, email: str) -> list[Enrollment]:
        session = self._db.get_session()
        try:
            stmt = select(Enrollment).where(Enrollment.email == email)
            return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.error("Enrollment scan failed: %s", type(e).__name__)
            raise ServiceUnavailableError("Service temporarily unavailable") from e
        finally:
            session.close()

    def list_active_for_user(self, email: str) -> list[Enrollment]:
        """List a user's active enrollments, in no particular order.

        Raises:
            ServiceUnavailableError: If the database fails.
        """
        enrollments = active_only(self._scan_for_email(normalize_email(email)))
        logger.debug("Found %d active enrollments", len(enrollments))
        return enrollments

    def list_all(self) -> list[Enrollment]:
        """List every enrollment, active and dropped.

        Administrative use only; not exposed to students.
        """
        session = self._db.get_session()
        try:
            return list(session.execute(select(Enrollment)).scalars().all())
        except SQLAlchemyError as e:
            logger.error("Enrollment scan failed: %s", type(e).__name__)
            raise ServiceUnavailableError("Service temporarily unavailable") from e
        finally:
            session.close()

    def is_enrolled(self, email: str, class_id: str) -> bool:
        """Whether the user has an active enrollment in the class."""
        return any(e.class_id == class_id for e in self.list_active_for_user(email))

    def drop(self, email: str, class_id_or_name: str) -> Enrollment:
        """Mark the first matching active enrollment as dropped.

        The record is kept; only its status and updated_at change. The change
        is conditional on the record still being active, so of several
        concurrent drops exactly one succeeds.

        Args:
            email: Owner email.
            class_id_or_name: Class id or class display name.

        Returns:
            The dropped Enrollment.

        Raises:
            EnrollmentNotFoundError: If no active enrollment matches.
            ServiceUnavailableError: If the database fails.
        """
        normalized_email = normalize_email(email)
        session = self._db.get_session()
        try:
            stmt = select(Enrollment).where(Enrollment.email == normalized_email)
            candidates = active_only(session.execute(stmt).scalars().all())
            enrollment = next(
                (e for e in candidates if matches_class(e, class_id_or_name)), None
            )
            if enrollment is None:
                raise EnrollmentNotFoundError("Enrollment not found")

            # Only an active row transitions; a concurrent drop leaves nothing to update
            result = session.execute(
                update(Enrollment)
                .where(
                    Enrollment.id == enrollment.id,
                    Enrollment.status == EnrollmentStatus.ACTIVE.value,
                )
                .values(status=EnrollmentStatus.DROPPED.value, updated_at=utcnow())
            )
            if result.rowcount == 0:
                session.rollback()
                logger.info("Enrollment already dropped for class %s", enrollment.class_id)
                raise EnrollmentNotFoundError("Enrollment not found")
            session.commit()
            logger.info(
                "Enrollment dropped: %s from class %s", normalized_email, enrollment.class_id
            )
            return enrollment
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Enrollment drop failed: %s", type(e).__name__)
            raise ServiceUnavailableError("Service temporarily unavailable") from e
        finally:
            session.close()
