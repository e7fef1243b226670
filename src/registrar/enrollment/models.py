"""Data models for the Enrollment module."""

from __future__ import annotations

from dataclasses import dataclass

from registrar.state_store import Enrollment  # noqa: TC001 - dataclass field type


@dataclass(frozen=True)
class ClassInfo:
    """A class offered in the catalog.

    Capacity and current enrollment are informational; nothing decrements
    them when a student enrolls.
    """

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


@dataclass(frozen=True)
class EnrollOutcome:
    """Result of an enroll request.

    Attributes:
        class_id: The requested class.
        class_name: Display name of the class.
        already_enrolled: True when the caller was enrolled before this call.
        enrollment: The record created by this call, if any.
    """

    class_id: str
    class_name: str
    already_enrolled: bool
    enrollment: Enrollment | None = None
