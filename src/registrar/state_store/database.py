"""SQLite engine and session management for State Store."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from registrar.state_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY = ":memory:"


def _build_engine(db_path: str, timeout_seconds: float) -> Engine:
    # Connections are shared with FastAPI's threadpool
    connect_args: dict[str, Any] = {"check_same_thread": False}
    if db_path == MEMORY:
        # One shared connection, or every session would get its own empty database
        return create_engine(
            f"sqlite:///{MEMORY}", poolclass=StaticPool, connect_args=connect_args
        )

    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    connect_args["timeout"] = timeout_seconds
    return create_engine(f"sqlite:///{db_path}", connect_args=connect_args)


class Database:
    """Lazily created SQLite engine with WAL journaling and a lock timeout.

    A write that cannot take the database lock within ``timeout_seconds``
    fails instead of blocking the request indefinitely.
    """

    def __init__(self, db_path: str = "registrar.db", timeout_seconds: float = 5.0) -> None:
        """Initialize the connection manager. Nothing is opened until first use.

        Args:
            db_path: SQLite file path, or ":memory:".
            timeout_seconds: Lock wait before a statement fails.
        """
        self.db_path = db_path
        self.timeout_seconds = timeout_seconds
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    def _on_connect(self, dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute(f"PRAGMA busy_timeout={int(self.timeout_seconds * 1000)}")
        finally:
            cursor.close()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            engine = _build_engine(self.db_path, self.timeout_seconds)
            event.listen(engine, "connect", self._on_connect)
            self._engine = engine
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Sessions that keep loaded attributes after commit."""
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._sessions

    def get_session(self) -> Session:
        return self.session_factory()

    def create_tables(self) -> None:
        """Create any missing tables and indexes."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop every table. Test and maintenance use only."""
        Base.metadata.drop_all(self.engine)

    def is_wal_mode(self) -> bool:
        with self.engine.connect() as conn:
            return conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"

    def close(self) -> None:
        """Dispose of the engine; the next use opens a fresh one."""
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessions = None
