"""Data models for the Identity module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class Identity:
    """An authenticated caller. Never carries credential material."""

    email: str
    name: str
    student_id: str


class DenialReason(StrEnum):
    """Why a session proof was rejected. Internal diagnostics only."""

    MISSING_PROOF = "missing_proof"
    INVALID_TOKEN = "invalid_token"
    UNKNOWN_USER = "unknown_user"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of resolving a session proof.

    Exactly one of ``identity`` and ``reason`` is set. Callers branch on
    ``granted`` rather than catching exceptions.
    """

    identity: Identity | None = None
    reason: DenialReason | None = None

    @classmethod
    def allow(cls, identity: Identity) -> AuthResult:
        return cls(identity=identity)

    @classmethod
    def deny(cls, reason: DenialReason) -> AuthResult:
        return cls(reason=reason)

    @property
    def granted(self) -> bool:
        return self.identity is not None


@dataclass(frozen=True)
class LoginResult:
    """Result of a successful login."""

    token: str
    identity: Identity
