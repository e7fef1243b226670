"""Unit tests for ClassCatalog."""

import pytest

from registrar.enrollment import ClassCatalog, ClassNotFoundError
from registrar.enrollment.models import ClassInfo


@pytest.mark.unit
class TestClassCatalog:
    """Tests for the static class catalog."""

    def test_default_classes(self) -> None:
        """The default catalog offers three classes."""
        names = [c.name for c in ClassCatalog().list_classes()]

        assert names == ["Web Development 101", "Database Basics", "Cybersecurity Fundamentals"]

    def test_get(self) -> None:
        """Classes are looked up by id."""
        info = ClassCatalog().get("2")

        assert info is not None
        assert info.name == "Database Basics"
        assert info.credits == 3

    def test_get_unknown(self) -> None:
        """Unknown ids return None."""
        assert ClassCatalog().get("99") is None

    def test_require_unknown(self) -> None:
        """require raises for unknown ids."""
        with pytest.raises(ClassNotFoundError, match="Class not found"):
            ClassCatalog().require("99")

    def test_custom_catalog(self) -> None:
        """A catalog can be built from other classes."""
        info = ClassInfo(
            id="x1",
            name="Compilers",
            instructor="Dr. Aho",
            description="Parsing and code generation.",
            capacity=10,
            current_enrollment=0,
            schedule="Mon 9:00 AM",
            semester="Spring 2025",
            credits=4,
            prerequisites="Data Structures",
            location="Room 1",
        )

        catalog = ClassCatalog([info])

        assert catalog.require("x1") is info
        assert catalog.get("1") is None
