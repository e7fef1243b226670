"""Identity - Session validation, registration and login."""

from registrar.identity.exceptions import (
    AuthenticationRequiredError,
    IdentityError,
    InvalidCredentialsError,
    InvalidTokenError,
    RegistrationFailedError,
    WeakPasswordError,
)
from registrar.identity.gate import SessionGate
from registrar.identity.models import AuthResult, DenialReason, Identity, LoginResult
from registrar.identity.service import AuthService
from registrar.identity.tokens import SessionTokenCodec

__all__ = [
    "AuthResult",
    "AuthService",
    "AuthenticationRequiredError",
    "DenialReason",
    "Identity",
    "IdentityError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "LoginResult",
    "RegistrationFailedError",
    "SessionGate",
    "SessionTokenCodec",
    "WeakPasswordError",
]
