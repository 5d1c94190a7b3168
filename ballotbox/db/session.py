"""Database session management."""
from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from ballotbox.core.logging_config import get_logger
from ballotbox.db.base import Base

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owned handle to the vote store.

    One instance is opened at application startup and disposed at shutdown;
    request handlers borrow sessions from it through ``get_db``.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        busy_timeout: float = 15.0,
    ):
        self.url = url
        self.engine = self._create_engine(url, pool_size, max_overflow, busy_timeout)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @staticmethod
    def _create_engine(url: str, pool_size: int, max_overflow: int, busy_timeout: float) -> Engine:
        if url.startswith("sqlite"):
            # Concurrent writers wait up to busy_timeout for the file lock
            engine = create_engine(
                url,
                echo=False,
                connect_args={"check_same_thread": False, "timeout": busy_timeout},
            )
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
            return engine

        return create_engine(
            url,
            pool_pre_ping=True,
            echo=False,
            pool_size=pool_size,
            max_overflow=max_overflow,
        )

    def create_all(self) -> None:
        """Create the options, tallies and voters tables if absent."""
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
        logger.info("database_disposed", url=self.engine.url.render_as_string(hide_password=True))

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context manager for getting a session outside of a request."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for FastAPI to get a session from the app's database."""
    database: Database = request.app.state.database
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
