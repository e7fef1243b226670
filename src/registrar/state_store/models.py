"""SQLAlchemy models for State Store."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import DateTime, Index, String, text
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class EnrollmentStatus(StrEnum):
    """Enrollment lifecycle state."""

    ACTIVE = "active"
    DROPPED = "dropped"


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


def make_enrollment_id(email: str, class_id: str, at: datetime) -> str:
    """Build an enrollment key from owner, class and creation time."""
    return f"{email}-{class_id}-{int(at.timestamp() * 1000)}"


_ACTIVE_ONLY = text("status = 'active'")


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime column, stored as UTC.

    SQLite keeps no offset, so values come back naive and are re-tagged as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("Naive datetime cannot be stored")
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """User model - one record per normalized email."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), primary_key=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    student_id: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    def __init__(
        self,
        email: str,
        password_hash: str,
        name: str,
        student_id: str,
        created_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        now = created_at if created_at is not None else utcnow()
        self.email = email
        self.password_hash = password_hash
        self.name = name
        self.student_id = student_id
        self.created_at = now
        self.updated_at = now

    def __repr__(self) -> str:
        return f"<User(email={self.email!r}, student_id={self.student_id!r})>"


class Enrollment(Base):
    """Enrollment model - status transitions only, never deleted."""

    __tablename__ = "enrollments"
    __table_args__ = (
        # At most one active enrollment per (email, class_id)
        Index(
            "uq_enrollments_active_email_class",
            "email",
            "class_id",
            unique=True,
            sqlite_where=_ACTIVE_ONLY,
            postgresql_where=_ACTIVE_ONLY,
        ),
    )

    id: Mapped[str] = mapped_column(String(320), primary_key=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    class_id: Mapped[str] = mapped_column(String(50), nullable=False)
    class_name: Mapped[str] = mapped_column(String(100), nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False)

    def __init__(
        self,
        email: str,
        class_id: str,
        class_name: str,
        id: str | None = None,
        enrolled_at: datetime | None = None,
        status: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.enrolled_at = enrolled_at if enrolled_at is not None else utcnow()
        self.id = id if id is not None else make_enrollment_id(email, class_id, self.enrolled_at)
        self.email = email
        self.class_id = class_id
        self.class_name = class_name
        self.status = status if status is not None else EnrollmentStatus.ACTIVE.value
        self.updated_at = None

    @property
    def enrollment_status(self) -> EnrollmentStatus:
        """Get status as EnrollmentStatus enum."""
        return EnrollmentStatus(self.status)

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE.value

    def __repr__(self) -> str:
        return (
            f"<Enrollment(id={self.id!r}, class_id={self.class_id!r}, "
            f"status={self.status!r})>"
        )
