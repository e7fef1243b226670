"""Exceptions for the Enrollment module."""


class EnrollmentError(Exception):
    """Base exception for enrollment errors."""


class ClassNotFoundError(EnrollmentError):
    """No class with the given id exists in the catalog."""
