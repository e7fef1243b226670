"""Password hashing and verification using bcrypt."""

from __future__ import annotations

import logging
import secrets
import string

import bcrypt

from registrar.credentials.exceptions import InvalidPasswordError

logger = logging.getLogger(__name__)

# Cost factor 10 is roughly 100ms per hash on commodity hardware
DEFAULT_ROUNDS = 10

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 100

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*"


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with a freshly generated salt.

    Args:
        password: Plain text password.
        rounds: bcrypt cost factor.

    Returns:
        The bcrypt hash, salt included.

    Raises:
        InvalidPasswordError: If the password is empty, shorter than 8 or
            longer than 100 characters.
    """
    if not password or not isinstance(password, str):
        raise InvalidPasswordError("Password is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidPasswordError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if len(password) > MAX_PASSWORD_LENGTH:
        raise InvalidPasswordError("Password is too long")

    hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds))
    logger.debug("Password hashed (rounds=%d)", rounds)
    return hashed.decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    Never raises: empty input, a malformed hash or any library error
    yields False.

    Args:
        password: Plain text password to check.
        password_hash: Stored bcrypt hash.

    Returns:
        True only if the password matches the hash.
    """
    if not password or not isinstance(password, str):
        return False
    if not password_hash or not isinstance(password_hash, str):
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except (ValueError, TypeError) as e:
        logger.warning("Password verification failed: %s", type(e).__name__)
        return False


def generate_password(length: int = 12) -> str:
    """Generate a random password for development and testing."""
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
