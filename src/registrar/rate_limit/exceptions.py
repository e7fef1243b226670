"""Exceptions for Rate Limit."""


class RateLimitedError(Exception):
    """Too many attempts for this identifier."""

    def __init__(self, message: str = "Too many attempts. Please try again later.") -> None:
        super().__init__(message)
