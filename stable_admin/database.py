"""
Database Configuration and Session Management

The engine and session factory live on a Database object that the
application builds at startup (see main.create_app) and disposes at
shutdown. Handlers receive sessions through the get_db dependency, which
looks the Database up on the running app instead of a module global.
"""
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from stable_admin.config import Settings
from stable_admin.core.exceptions import BackendError, PersistenceError, backend_message
import logging

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured backend.

    SQLite URLs (tests, local runs) get a single shared connection so an
    in-memory database survives across sessions.
    """
    if settings.DATABASE_URL.startswith("sqlite"):
        engine = create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.DEBUG,
        )
    else:
        engine = create_engine(
            settings.DATABASE_URL,
            poolclass=QueuePool,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=True,  # Verify connections before using (handles stale connections)
            echo=settings.DEBUG,
        )

    @event.listens_for(engine, "connect")
    def set_connection_timezone(dbapi_connection, connection_record):
        """Set connection-level configuration on new connections."""
        cursor = dbapi_connection.cursor()
        # PostgreSQL only, SQLite has no session time zone
        if settings.DATABASE_URL.startswith("postgresql"):
            cursor.execute("SET TIME ZONE 'UTC'")
        cursor.close()
        logger.debug("New database connection established")

    return engine


class Database:
    """
    Explicitly constructed database client.

    Owns the engine and the session factory. One instance per application;
    nothing else in the codebase creates engines.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = build_engine(settings)
        # expire_on_commit=False: handlers serialize objects after commit
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            expire_on_commit=False,
        )

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        """
        Create tables for every registered model.

        Dev/test convenience; production schemas are managed by migrations.
        """
        # Make sure every model module is imported before create_all
        import stable_admin.models  # noqa: F401

        logger.warning("create_all() called - use migrations in production!")
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency function that provides a database session.

    The session is automatically closed after the request completes.
    """
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, action: str) -> None:
    """
    Commit the session, translating database failures.

    Constraint violations become PersistenceError, anything else the
    database raises becomes BackendError. Either way the backend message
    is passed through and the session is rolled back.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.error(f"Constraint violation while trying to {action}: {backend_message(exc)}")
        raise PersistenceError(f"Failed to {action}", [backend_message(exc)]) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {backend_message(exc)}")
        raise BackendError(f"Failed to {action}", [backend_message(exc)]) from exc
