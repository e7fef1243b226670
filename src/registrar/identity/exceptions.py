"""Exceptions for the Identity module.

Messages are deliberately generic. A caller can never tell an unknown
email from a wrong password, or a duplicate registration from any other
rejected one.
"""


class IdentityError(Exception):
    """Base exception for identity errors."""


class AuthenticationRequiredError(IdentityError):
    """The request carries no valid session proof."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidCredentialsError(IdentityError):
    """Login rejected."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class RegistrationFailedError(IdentityError):
    """Registration rejected."""

    def __init__(
        self,
        message: str = "Registration failed. Please check your information and try again.",
    ) -> None:
        super().__init__(message)


class WeakPasswordError(IdentityError):
    """Password does not meet the strength rubric."""

    def __init__(self, feedback: list[str] | None = None) -> None:
        super().__init__("Password is too weak")
        self.feedback = feedback or []


class InvalidTokenError(IdentityError):
    """Session token is malformed, expired or badly signed."""
