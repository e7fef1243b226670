"""AuthService - Registration and login."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from registrar.credentials import (
    DEFAULT_ROUNDS,
    InvalidPasswordError,
    hash_password,
    score_strength,
    verify_password,
)
from registrar.identity.exceptions import (
    InvalidCredentialsError,
    RegistrationFailedError,
    WeakPasswordError,
)
from registrar.identity.models import Identity, LoginResult
from registrar.rate_limit import RateLimitedError
from registrar.state_store import UserExistsError, normalize_email

if TYPE_CHECKING:
    from registrar.identity.tokens import SessionTokenCodec
    from registrar.rate_limit import RateLimiter
    from registrar.state_store import User, UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Creates accounts and exchanges credentials for session tokens.

    Login failures are indistinguishable from each other: a rate-limited
    attempt, an unknown email, a wrong password and an internal error all
    raise the same InvalidCredentialsError.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: SessionTokenCodec,
        login_limiter: RateLimiter,
        registration_limiter: RateLimiter,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        """Initialize the auth service.

        Args:
            users: Repository for user records.
            tokens: Codec that issues session tokens.
            login_limiter: Limiter keyed by email for login attempts.
            registration_limiter: Limiter keyed by client address for sign-ups.
            bcrypt_rounds: Cost factor for new password hashes.
        """
        self._users = users
        self._tokens = tokens
        self._login_limiter = login_limiter
        self._registration_limiter = registration_limiter
        self._bcrypt_rounds = bcrypt_rounds

    def register(
        self,
        email: str,
        password: str,
        name: str,
        student_id: str,
        origin: str,
    ) -> User:
        """Create a new account.

        Args:
            email: Email address.
            password: Plain text password. Never logged or stored.
            name: Display name.
            student_id: Student ID.
            origin: Client address, used as the rate-limit key.

        Returns:
            The created User.

        Raises:
            RateLimitedError: If this origin has registered too often.
            WeakPasswordError: If the password fails the strength rubric.
            ValidationError: If a field is malformed.
            RegistrationFailedError: If the account cannot be created,
                including when the email is taken.
        """
        if not self._registration_limiter.is_allowed(f"register-{origin}"):
            logger.info("Registration rate limit exceeded for %s", origin)
            raise RateLimitedError()

        strength = score_strength(password)
        if not strength.valid:
            raise WeakPasswordError(strength.feedback)

        try:
            password_hash = hash_password(password, rounds=self._bcrypt_rounds)
        except InvalidPasswordError as e:
            raise WeakPasswordError([str(e)]) from e

        try:
            user = self._users.create(email, password_hash, name, student_id)
        except UserExistsError as e:
            logger.info("Registration attempt for existing email")
            raise RegistrationFailedError() from e

        logger.info("User registered: %s", user.email)
        return user

    def login(self, email: str, password: str) -> LoginResult:
        """Exchange credentials for a session token.

        A successful login clears the attempt counter for the email.

        Raises:
            InvalidCredentialsError: For every kind of failure.
        """
        normalized_email = normalize_email(email or "")
        try:
            if not self._login_limiter.is_allowed(normalized_email):
                logger.info("Login rate limit exceeded")
                raise InvalidCredentialsError()

            user = self._users.get_by_email(normalized_email)
            if user is None:
                logger.info("Login attempt for unknown user")
                raise InvalidCredentialsError()

            if not verify_password(password, user.password_hash):
                logger.info("Login attempt with wrong password: %s", normalized_email)
                raise InvalidCredentialsError()

            self._login_limiter.clear(normalized_email)
            identity = Identity(email=user.email, name=user.name, student_id=user.student_id)
            token = self._tokens.issue(identity)
        except InvalidCredentialsError:
            raise
        except Exception as e:
            logger.error("Login failed: %s", type(e).__name__)
            raise InvalidCredentialsError() from e

        logger.info("Successful login: %s", identity.email)
        return LoginResult(token=token, identity=identity)
