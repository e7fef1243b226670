"""Signed session tokens (JWT, HS256)."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from jose import JWTError, jwt

from registrar.identity.exceptions import InvalidTokenError
from registrar.identity.models import Identity

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ("sub", "name", "student_id", "iat", "exp")


class SessionTokenCodec:
    """Issues and verifies session tokens carrying the caller's identity."""

    def __init__(
        self,
        secret: str,
        max_age_seconds: int = 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("secret is required")
        self._secret = secret
        self.max_age_seconds = max_age_seconds
        self._clock = clock

    def issue(self, identity: Identity) -> str:
        """Create a token for an identity, valid for ``max_age_seconds``."""
        now = int(self._clock())
        claims = {
            "sub": identity.email,
            "name": identity.name,
            "student_id": identity.student_id,
            "iat": now,
            "exp": now + self.max_age_seconds,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        """Verify a token and return its claims.

        Raises:
            InvalidTokenError: If the token is malformed, badly signed,
                expired, or missing a required claim.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidTokenError("Invalid session token") from e

        for claim in REQUIRED_CLAIMS:
            if claim not in claims:
                raise InvalidTokenError("Invalid session token")
        if not all(isinstance(claims[c], str) and claims[c] for c in ("sub", "name", "student_id")):
            raise InvalidTokenError("Invalid session token")
        if not isinstance(claims["exp"], int) or claims["exp"] <= int(self._clock()):
            raise InvalidTokenError("Session expired")
        return claims
