"""Data models for Credentials."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PasswordStrength:
    """Result of scoring a password.

    Attributes:
        valid: Whether the password is acceptable for a new account.
        score: Strength score, clamped to a minimum of 0.
        feedback: Human-readable hints, one per unmet criterion.
    """

    valid: bool
    score: int
    feedback: list[str] = field(default_factory=list)
