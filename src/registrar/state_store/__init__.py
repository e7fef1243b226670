"""State Store - Persistent storage for users and enrollments."""

from registrar.state_store.enrollments import (
    EnrollmentRepository,
    active_only,
    matches_class,
)
from registrar.state_store.exceptions import (
    AlreadyEnrolledError,
    EnrollmentNotFoundError,
    ServiceUnavailableError,
    StateStoreError,
    UserExistsError,
    ValidationError,
)
from registrar.state_store.models import (
    Enrollment,
    EnrollmentStatus,
    User,
)
from registrar.state_store.store import StateStore
from registrar.state_store.users import UserRepository
from registrar.state_store.validation import normalize_email

__all__ = [
    "AlreadyEnrolledError",
    "Enrollment",
    "EnrollmentNotFoundError",
    "EnrollmentRepository",
    "EnrollmentStatus",
    "ServiceUnavailableError",
    "StateStore",
    "StateStoreError",
    "User",
    "UserExistsError",
    "UserRepository",
    "ValidationError",
    "active_only",
    "matches_class",
    "normalize_email",
]
