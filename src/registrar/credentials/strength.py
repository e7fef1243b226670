"""Password strength scoring."""

from __future__ import annotations

import re

from registrar.credentials.models import PasswordStrength

MIN_VALID_SCORE = 4

_SYMBOL_RE = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")
_REPEAT_RE = re.compile(r"(.)\1{2,}")
_WEAK_PATTERN_RE = re.compile(r"123|abc|qwe|password|admin", re.IGNORECASE)


def score_strength(password: str) -> PasswordStrength:
    """Score a password against the strength rubric.

    Each of length >= 8, length >= 12, lowercase, uppercase, digit and symbol
    adds one point. A character repeated three or more times in a row costs
    one point, and a common pattern ("123", "abc", "qwe", "password",
    "admin") costs two.

    Args:
        password: Password to score. Never logged.

    Returns:
        PasswordStrength; valid when the score is at least 4 and the
        password has at least 8 characters.
    """
    if not password:
        return PasswordStrength(valid=False, score=0, feedback=["Password is required"])

    feedback: list[str] = []
    score = 0

    if len(password) < 8:
        feedback.append("Password must be at least 8 characters long")
    else:
        score += 1

    if len(password) >= 12:
        score += 1

    checks = [
        (r"[a-z]", "Include lowercase letters"),
        (r"[A-Z]", "Include uppercase letters"),
        (r"\d", "Include numbers"),
    ]
    for pattern, hint in checks:
        if re.search(pattern, password):
            score += 1
        else:
            feedback.append(hint)

    if _SYMBOL_RE.search(password):
        score += 1
    else:
        feedback.append("Include special characters")

    if _REPEAT_RE.search(password):
        feedback.append("Avoid repeating characters")
        score -= 1

    if _WEAK_PATTERN_RE.search(password):
        feedback.append("Avoid common patterns")
        score -= 2

    valid = score >= MIN_VALID_SCORE and len(password) >= 8
    if valid and not feedback:
        feedback.append("Strong password!")

    return PasswordStrength(valid=valid, score=max(0, score), feedback=feedback)
