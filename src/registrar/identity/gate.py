"""SessionGate - Resolves a session proof to a caller identity."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from registrar.identity.exceptions import AuthenticationRequiredError, InvalidTokenError
from registrar.identity.models import AuthResult, DenialReason, Identity
from registrar.state_store import StateStoreError, normalize_email

if TYPE_CHECKING:
    from registrar.identity.tokens import SessionTokenCodec
    from registrar.state_store import UserRepository

logger = logging.getLogger(__name__)


class SessionGate:
    """Authenticates requests before any repository access.

    Resolution fails closed: a bad token, an unknown user and a store
    failure all come back as a denial, and nothing about the cause reaches
    the caller beyond the denial itself.
    """

    def __init__(self, tokens: SessionTokenCodec, users: UserRepository) -> None:
        """Initialize the gate.

        Args:
            tokens: Codec that verifies session tokens.
            users: Repository used to confirm the user still exists.
        """
        self._tokens = tokens
        self._users = users

    def resolve(self, token: str | None) -> AuthResult:
        """Resolve a session token to an identity or a denial.

        The identity is rebuilt from the stored user record, so it is either
        the complete email, name and student ID triple or nothing.
        """
        if not token:
            return AuthResult.deny(DenialReason.MISSING_PROOF)

        try:
            claims = self._tokens.decode(token)
        except InvalidTokenError:
            return AuthResult.deny(DenialReason.INVALID_TOKEN)
        except Exception:  # noqa: BLE001 - any decode failure means no identity
            logger.exception("Unexpected error decoding session token")
            return AuthResult.deny(DenialReason.INVALID_TOKEN)

        try:
            user = self._users.get_by_email(claims["sub"])
        except StateStoreError:
            logger.warning("Session resolution failed: store unavailable")
            return AuthResult.deny(DenialReason.STORE_ERROR)

        if user is None:
            return AuthResult.deny(DenialReason.UNKNOWN_USER)

        return AuthResult.allow(
            Identity(email=user.email, name=user.name, student_id=user.student_id)
        )

    def try_auth(self, token: str | None) -> Identity | None:
        """Resolve a token, returning None when it is not valid."""
        return self.resolve(token).identity

    def require_auth(self, token: str | None) -> Identity:
        """Resolve a token, raising when it is not valid.

        Raises:
            AuthenticationRequiredError: If the token does not resolve.
        """
        result = self.resolve(token)
        if result.identity is None:
            logger.debug("Authentication denied: %s", result.reason)
            raise AuthenticationRequiredError()
        return result.identity

    @staticmethod
    def owns_resource(identity_email: str, resource_email: str) -> bool:
        """Whether a resource belongs to the identity.

        Ownership is equality of normalized emails; there are no roles.
        """
        if not identity_email or not resource_email:
            return False
        return normalize_email(identity_email) == normalize_email(resource_email)
