"""EnrollmentService - Enroll, unenroll and list for authenticated callers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from registrar.enrollment.catalog import ClassCatalog
from registrar.enrollment.models import EnrollOutcome
from registrar.identity import AuthenticationRequiredError
from registrar.rate_limit import RateLimitedError
from registrar.state_store import AlreadyEnrolledError

if TYPE_CHECKING:
    from registrar.identity import Identity
    from registrar.rate_limit import RateLimiter
    from registrar.state_store import Enrollment, EnrollmentRepository

logger = logging.getLogger(__name__)


def _require_identity(identity: Identity | None) -> Identity:
    if identity is None:
        raise AuthenticationRequiredError()
    return identity


class EnrollmentService:
    """Orchestrates the enrollment verbs.

    Every verb requires a resolved identity and touches nothing when it is
    missing. Enrolling is idempotent: asking to join a class the caller is
    already in succeeds and reports ``already_enrolled``.
    """

    def __init__(
        self,
        enrollments: EnrollmentRepository,
        limiter: RateLimiter,
        catalog: ClassCatalog | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            enrollments: Repository for enrollment records.
            limiter: Limiter for enrollment writes, keyed by identity and origin.
            catalog: Classes that can be enrolled in by id.
        """
        self._enrollments = enrollments
        self._limiter = limiter
        self._catalog = catalog if catalog is not None else ClassCatalog()

    def _admit(self, identity: Identity | None, origin: str) -> Identity:
        caller = _require_identity(identity)
        if not self._limiter.is_allowed(f"enrollment-{caller.email}-{origin}"):
            logger.info("Enrollment rate limit exceeded for %s", caller.email)
            raise RateLimitedError("Too many enrollment attempts. Please try again later.")
        return caller

    def enroll_by_id(
        self, identity: Identity | None, class_id: str, origin: str = "unknown"
    ) -> EnrollOutcome:
        """Enroll the caller in a catalog class.

        The attempt counts against the caller's limit before the class id is
        looked up, so requests for unknown classes are limited too.

        Raises:
            AuthenticationRequiredError: If identity is None.
            RateLimitedError: If the caller has made too many enrollment requests.
            ClassNotFoundError: If the class id is not in the catalog.
        """
        caller = self._admit(identity, origin)
        info = self._catalog.require(class_id)
        return self._enroll(caller, info.id, info.name)

    def enroll(
        self,
        identity: Identity | None,
        class_id: str,
        class_name: str,
        origin: str = "unknown",
    ) -> EnrollOutcome:
        """Enroll the caller in a class.

        Args:
            identity: The authenticated caller.
            class_id: Catalog id of the class.
            class_name: Display name of the class.
            origin: Client address, part of the rate-limit key.

        Returns:
            EnrollOutcome; ``already_enrolled`` is True when the caller had an
            active enrollment, including one created by a concurrent request.

        Raises:
            AuthenticationRequiredError: If identity is None.
            RateLimitedError: If the caller has made too many enrollment requests.
            ValidationError: If the class fields are malformed.
        """
        return self._enroll(self._admit(identity, origin), class_id, class_name)

    def _enroll(self, caller: Identity, class_id: str, class_name: str) -> EnrollOutcome:
        if self._enrollments.is_enrolled(caller.email, class_id):
            return EnrollOutcome(class_id=class_id, class_name=class_name, already_enrolled=True)

        try:
            enrollment = self._enrollments.enroll(caller.email, class_name, class_id)
        except AlreadyEnrolledError:
            logger.info("Concurrent enrollment absorbed for class %s", class_id)
            return EnrollOutcome(class_id=class_id, class_name=class_name, already_enrolled=True)

        return EnrollOutcome(
            class_id=class_id,
            class_name=class_name,
            already_enrolled=False,
            enrollment=enrollment,
        )

    def unenroll(self, identity: Identity | None, class_id_or_name: str) -> Enrollment:
        """Drop the caller's enrollment in a class.

        Raises:
            AuthenticationRequiredError: If identity is None.
            EnrollmentNotFoundError: If the caller has no matching active enrollment.
        """
        caller = _require_identity(identity)
        return self._enrollments.drop(caller.email, class_id_or_name)

    def list_my_enrollments(self, identity: Identity | None) -> list[Enrollment]:
        """List the caller's active enrollments.

        Raises:
            AuthenticationRequiredError: If identity is None.
        """
        caller = _require_identity(identity)
        return self._enrollments.list_active_for_user(caller.email)
