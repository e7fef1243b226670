"""Pydantic models for REST API.

Request models are the first validation layer; repositories validate the
same constraints again before storage.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
)

T = TypeVar("T")

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
NAME_PATTERN = r"^[a-zA-Z '\-]+$"
STUDENT_ID_PATTERN = r"^[a-zA-Z0-9\-]+$"

# Passwords are taken as typed; only profile fields are trimmed
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Auth models


class RegisterRequest(BaseModel):
    """Request model for creating an account."""

    name: TrimmedStr = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    email: TrimmedStr = Field(..., min_length=3, max_length=254, pattern=EMAIL_PATTERN)
    student_id: TrimmedStr = Field(
        ...,
        min_length=5,
        max_length=20,
        pattern=STUDENT_ID_PATTERN,
        validation_alias=AliasChoices("student_id", "studentId"),
    )
    password: str = Field(..., min_length=8, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("student_id")
    @classmethod
    def uppercase_student_id(cls, value: str) -> str:
        return value.upper()

    @field_validator("password")
    @classmethod
    def require_character_classes(cls, value: str) -> str:
        if not (
            re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)
        ):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return value


class LoginRequest(BaseModel):
    """Request model for logging in."""

    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1, max_length=100)


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    email: str
    name: str
    student_id: str
    created_at: datetime


def user_to_response(user: Any) -> UserResponse:
    """Convert a User model to UserResponse."""
    return UserResponse.model_validate(user)


class IdentityResponse(BaseModel):
    """The authenticated caller."""

    model_config = ConfigDict(from_attributes=True)

    email: str
    name: str
    student_id: str


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    user: IdentityResponse
    token: str


class MessageResponse(BaseModel):
    message: str


# Class catalog models


class ClassResponse(BaseModel):
    """Response model for a catalog class."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    instructor: str
    description: str
    capacity: int
    current_enrollment: int
    schedule: str
    semester: str
    credits: int
    prerequisites: str
    location: str


# Enrollment models


class EnrollmentActionRequest(BaseModel):
    """Request model for enrolling in or leaving a class."""

    model_config = ConfigDict(str_strip_whitespace=True)

    class_id: str = Field(
        ...,
        min_length=1,
        max_length=50,
        validation_alias=AliasChoices("class_id", "classId"),
    )
    action: Literal["enroll", "unenroll"]


class UnenrollRequest(BaseModel):
    """Request model for leaving a class by id or display name."""

    class_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("class_name", "className"),
    )


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    class_id: str
    class_name: str
    enrolled_at: datetime
    updated_at: datetime | None
    status: str


def enrollment_to_response(enrollment: Any) -> EnrollmentResponse:
    """Convert an Enrollment model to EnrollmentResponse."""
    return EnrollmentResponse.model_validate(enrollment)


class EnrollActionResponse(BaseModel):
    """Response model for enroll and unenroll actions."""

    message: str
    class_id: str | None = None
    class_name: str
    already_enrolled: bool = False
