"""Credentials - Password hashing, verification and strength scoring."""

from registrar.credentials.exceptions import CredentialError, InvalidPasswordError
from registrar.credentials.hashing import (
    DEFAULT_ROUNDS,
    generate_password,
    hash_password,
    verify_password,
)
from registrar.credentials.models import PasswordStrength
from registrar.credentials.strength import score_strength

__all__ = [
    "DEFAULT_ROUNDS",
    "CredentialError",
    "InvalidPasswordError",
    "PasswordStrength",
    "generate_password",
    "hash_password",
    "score_strength",
    "verify_password",
]
