"""Custom exceptions for State Store.

Messages are short and generic. They never carry storage engine text or
the input values that caused them.
"""


class StateStoreError(Exception):
    """Base exception for State Store errors."""


class ValidationError(StateStoreError, ValueError):
    """A field violates its format or length constraint."""


class UserExistsError(StateStoreError):
    """A user with the given email already exists."""


class AlreadyEnrolledError(StateStoreError):
    """The user already has an active enrollment in the class."""


class EnrollmentNotFoundError(StateStoreError):
    """No active enrollment matches the requested class."""


class ServiceUnavailableError(StateStoreError):
    """The backing store failed or timed out."""
