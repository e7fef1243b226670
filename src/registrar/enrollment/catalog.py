"""Static class catalog."""

from __future__ import annotations

from registrar.enrollment.exceptions import ClassNotFoundError
from registrar.enrollment.models import ClassInfo

DEFAULT_CLASSES = (
    ClassInfo(
        id="1",
        name="Web Development 101",
        instructor="Dr. Smith",
        description=(
            "Learn HTML, CSS, and JavaScript fundamentals. Perfect for beginners "
            "looking to start their web development journey."
        ),
        capacity=30,
        current_enrollment=18,
        schedule="Mon/Wed 10:00-11:30 AM",
        semester="Fall 2024",
        credits=3,
        prerequisites="None",
        location="Computer Lab A",
    ),
    ClassInfo(
        id="2",
        name="Database Basics",
        instructor="Prof. Johnson",
        description=(
            "Introduction to SQL and NoSQL databases. Learn database design, "
            "queries, and optimization techniques."
        ),
        capacity=25,
        current_enrollment=12,
        schedule="Tue/Thu 2:00-3:30 PM",
        semester="Fall 2024",
        credits=3,
        prerequisites="Basic programming knowledge",
        location="Room 205",
    ),
    ClassInfo(
        id="3",
        name="Cybersecurity Fundamentals",
        instructor="Dr. Lee",
        description=(
            "Security best practices and common vulnerabilities. Learn to protect "
            "systems and data from cyber threats."
        ),
        capacity=20,
        current_enrollment=15,
        schedule="Wed/Fri 1:00-2:30 PM",
        semester="Fall 2024",
        credits=4,
        prerequisites="Computer Science 101",
        location="Security Lab",
    ),
)


class ClassCatalog:
    """Read-only lookup of offered classes by id."""

    def __init__(self, classes: tuple[ClassInfo, ...] | list[ClassInfo] = DEFAULT_CLASSES) -> None:
        self._classes = {c.id: c for c in classes}

    def get(self, class_id: str) -> ClassInfo | None:
        return self._classes.get(class_id)

    def require(self, class_id: str) -> ClassInfo:
        """Get a class by id.

        Raises:
            ClassNotFoundError: If the id is not in the catalog.
        """
        info = self.get(class_id)
        if info is None:
            raise ClassNotFoundError("Class not found")
        return info

    def list_classes(self) -> list[ClassInfo]:
        return list(self._classes.values())
