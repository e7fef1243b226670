"""Enrollment - Class catalog and the enrollment orchestration service."""

from registrar.enrollment.catalog import DEFAULT_CLASSES, ClassCatalog
from registrar.enrollment.exceptions import ClassNotFoundError, EnrollmentError
from registrar.enrollment.models import ClassInfo, EnrollOutcome
from registrar.enrollment.service import EnrollmentService

__all__ = [
    "DEFAULT_CLASSES",
    "ClassCatalog",
    "ClassInfo",
    "ClassNotFoundError",
    "EnrollOutcome",
    "EnrollmentError",
    "EnrollmentService",
]
