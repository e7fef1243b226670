"""Field normalization and validation at the repository boundary.

Request models validate the same constraints first; these checks run again
right before storage so no single validation point is trusted.
"""

from __future__ import annotations

import re

from registrar.state_store.exceptions import ValidationError

EMAIL_MAX_LENGTH = 254
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
STUDENT_ID_MIN_LENGTH = 5
STUDENT_ID_MAX_LENGTH = 20
CLASS_ID_MAX_LENGTH = 50
CLASS_NAME_MAX_LENGTH = 100

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NAME_RE = re.compile(r"[a-zA-Z '\-]+")
STUDENT_ID_RE = re.compile(r"[a-zA-Z0-9\-]+")


def normalize_email(email: str) -> str:
    """Lowercase and trim an email into its canonical identity key."""
    return email.strip().lower()


def validate_email(email: str) -> str:
    """Normalize and validate an email address.

    Returns:
        The normalized email.

    Raises:
        ValidationError: If the email is missing, malformed or too long.
    """
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")
    normalized = normalize_email(email)
    if not EMAIL_RE.fullmatch(normalized):
        raise ValidationError("Invalid email format")
    if len(normalized) > EMAIL_MAX_LENGTH:
        raise ValidationError("Email too long")
    return normalized


def validate_name(name: str) -> str:
    """Trim and validate a display name."""
    if not name or not isinstance(name, str):
        raise ValidationError("Name is required")
    trimmed = name.strip()
    if not NAME_MIN_LENGTH <= len(trimmed) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    if not NAME_RE.fullmatch(trimmed):
        raise ValidationError("Name can only contain letters, spaces, hyphens, and apostrophes")
    return trimmed


def validate_student_id(student_id: str) -> str:
    """Trim, validate and uppercase a student ID."""
    if not student_id or not isinstance(student_id, str):
        raise ValidationError("Student ID is required")
    trimmed = student_id.strip()
    if not STUDENT_ID_MIN_LENGTH <= len(trimmed) <= STUDENT_ID_MAX_LENGTH:
        raise ValidationError(
            f"Student ID must be between {STUDENT_ID_MIN_LENGTH} "
            f"and {STUDENT_ID_MAX_LENGTH} characters"
        )
    if not STUDENT_ID_RE.fullmatch(trimmed):
        raise ValidationError("Student ID can only contain letters, numbers, and hyphens")
    return trimmed.upper()


def validate_class_id(class_id: str) -> str:
    if not class_id or not isinstance(class_id, str) or not class_id.strip():
        raise ValidationError("Class ID is required")
    if len(class_id) > CLASS_ID_MAX_LENGTH:
        raise ValidationError("Class ID is too long")
    return class_id


def validate_class_name(class_name: str) -> str:
    if not class_name or not isinstance(class_name, str) or not class_name.strip():
        raise ValidationError("Class name is required")
    if len(class_name) > CLASS_NAME_MAX_LENGTH:
        raise ValidationError("Class name is too long")
    return class_name
