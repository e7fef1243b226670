"""Integration tests for enrollment records in a file-backed StateStore."""

import threading
from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from registrar.enrollment import EnrollmentService
from registrar.identity import Identity
from registrar.rate_limit import RateLimiter
from registrar.state_store import (
    AlreadyEnrolledError,
    Enrollment,
    EnrollmentNotFoundError,
    EnrollmentStatus,
    StateStore,
)

EMAIL = "ada@example.com"


def run_concurrently(target, count: int) -> None:
    threads = [threading.Thread(target=target) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


@pytest.mark.integration
class TestEnrollmentPersistence:
    """Tests for enrollment persistence."""

    def test_dropped_record_persists(self, temp_db_path: str) -> None:
        """A dropped enrollment is kept, with its status, across reconnects."""
        store1 = StateStore(temp_db_path)
        store1.enrollments.enroll(EMAIL, "Database Basics", "2")
        store1.enrollments.drop(EMAIL, "Database Basics")
        store1.close()

        store2 = StateStore(temp_db_path)
        records = store2.enrollments.list_all()
        active = store2.enrollments.list_active_for_user(EMAIL)
        store2.close()

        assert len(records) == 1
        assert records[0].status == EnrollmentStatus.DROPPED.value
        assert records[0].updated_at is not None
        assert active == []

    def test_timestamps_read_back_as_utc(self, temp_db_path: str) -> None:
        """Stored times come back timezone-aware and unchanged."""
        store1 = StateStore(temp_db_path)
        created = store1.enrollments.enroll(EMAIL, "Database Basics", "2")
        dropped = store1.enrollments.drop(EMAIL, "2")
        store1.close()

        store2 = StateStore(temp_db_path)
        record = store2.enrollments.list_all()[0]
        store2.close()

        assert record.enrolled_at.tzinfo is not None
        assert record.enrolled_at.utcoffset() == timedelta(0)
        assert record.enrolled_at == created.enrolled_at
        assert record.updated_at == dropped.updated_at

    def test_database_rejects_second_active_record(self, store: StateStore) -> None:
        """The store itself refuses two active records for one class."""
        store.enrollments.enroll(EMAIL, "Database Basics", "2")

        session = store._db.get_session()
        try:
            session.add(
                Enrollment(email=EMAIL, class_id="2", class_name="Database Basics", id="dup")
            )
            with pytest.raises(IntegrityError):
                session.commit()
            session.rollback()
        finally:
            session.close()

    def test_dropped_records_do_not_block(self, store: StateStore) -> None:
        """Any number of dropped records may coexist with one active record."""
        for _ in range(3):
            store.enrollments.enroll(EMAIL, "Database Basics", "2")
            store.enrollments.drop(EMAIL, "2")
        store.enrollments.enroll(EMAIL, "Database Basics", "2")

        records = store.enrollments.list_all()

        assert len(records) == 4
        assert len({r.id for r in records}) == 4
        assert sum(r.is_active for r in records) == 1


@pytest.mark.integration
class TestConcurrentEnrollment:
    """Tests for concurrent enrollment requests."""

    def test_repository_double_enroll(self, store: StateStore) -> None:
        """Concurrent enrolls in one class leave exactly one active record."""
        created: list[Enrollment] = []
        rejected: list[Exception] = []
        others: list[Exception] = []
        barrier = threading.Barrier(5)

        def enroll() -> None:
            barrier.wait()
            try:
                created.append(store.enrollments.enroll(EMAIL, "Database Basics", "2"))
            except AlreadyEnrolledError as e:
                rejected.append(e)
            except Exception as e:  # noqa: BLE001
                others.append(e)

        run_concurrently(enroll, 5)

        assert others == []
        assert len(created) == 1
        assert len(rejected) == 4
        assert len(store.enrollments.list_active_for_user(EMAIL)) == 1

    def test_service_double_enroll_is_idempotent(self, store: StateStore) -> None:
        """Through the service every concurrent request succeeds, one writes."""
        service = EnrollmentService(store.enrollments, RateLimiter(100, 60_000))
        identity = Identity(email=EMAIL, name="Ada Lovelace", student_id="STU-12345")
        outcomes = []
        errors: list[Exception] = []
        barrier = threading.Barrier(5)

        def enroll() -> None:
            barrier.wait()
            try:
                outcomes.append(service.enroll(identity, "2", "Database Basics"))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        run_concurrently(enroll, 5)

        assert errors == []
        assert len(outcomes) == 5
        assert sum(not o.already_enrolled for o in outcomes) == 1
        assert len(store.enrollments.list_all()) == 1

    def test_concurrent_drop_single_winner(self, store: StateStore) -> None:
        """Of several concurrent drops of one enrollment, exactly one succeeds."""
        store.enrollments.enroll(EMAIL, "Database Basics", "2")
        dropped: list[Enrollment] = []
        errors: list[Exception] = []
        barrier = threading.Barrier(5)

        def drop() -> None:
            barrier.wait()
            try:
                dropped.append(store.enrollments.drop(EMAIL, "2"))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        run_concurrently(drop, 5)

        assert len(dropped) == 1
        assert len(errors) == 4
        assert all(isinstance(e, EnrollmentNotFoundError) for e in errors)
        records = store.enrollments.list_all()
        assert len(records) == 1
        assert records[0].status == EnrollmentStatus.DROPPED.value
        assert records[0].updated_at == dropped[0].updated_at
        assert store.enrollments.is_enrolled(EMAIL, "2") is False
