"""
Database configuration and session management.

This module builds the SQLAlchemy engine from the application settings, waits for
the database to become reachable with a bounded number of retries, runs the schema
migration and provides a transaction scope used by the user service.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.exc import SQLAlchemyError, OperationalError

from .config import Settings

# Configure logging
logger = logging.getLogger(__name__)

# Create Base class for declarative models
Base = declarative_base()


# PUBLIC_INTERFACE
def get_database_url(settings: Settings) -> str:
    """
    Build the database URL for the configured backend.

    Args:
        settings: Application settings

    Returns:
        str: SQLAlchemy database URL
    """
    if settings.DB_TYPE == "sqlite":
        return f"sqlite:///{settings.SQLITE_DB}"
    return (
        f"mysql+pymysql://{settings.DB_USERNAME}:{settings.DB_PASSWORD}@"
        f"{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_TABLE}"
    )


# PUBLIC_INTERFACE
def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured backend.

    The MySQL connection is opened with TLS disabled.

    Args:
        settings: Application settings

    Returns:
        Engine: Configured engine (no connection is opened yet)
    """
    url = get_database_url(settings)
    if settings.DB_TYPE == "sqlite":
        return create_engine(
            url,
            connect_args={"check_same_thread": False},  # Required for SQLite
        )
    return create_engine(
        url,
        connect_args={"ssl_disabled": True},
        pool_pre_ping=True,  # Enable automatic reconnection
        pool_size=10,  # Set connection pool size
        max_overflow=20,  # Allow up to 20 connections to overflow from the pool
        pool_timeout=30,  # Connection timeout in seconds
        pool_recycle=1800,  # Recycle connections after 30 minutes
        echo=False,  # Set to True for SQL query logging
    )


# PUBLIC_INTERFACE
def connect_with_retry(
    engine: Engine,
    retries: int = 3,
    delay: float = 5.0
) -> Engine:
    """
    Wait until the database answers a ping.

    The database container may be running without accepting connections yet, so
    a failed connection is retried a fixed number of times with a fixed delay.

    Args:
        engine: Engine to connect with
        retries: Number of retries after the first failed attempt
        delay: Seconds to wait between attempts

    Returns:
        Engine: The same engine, known to be reachable

    Raises:
        OperationalError: If the database is still unreachable after all retries
    """
    attempt = 0
    while True:
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.info("Database connection established")
            return engine
        except OperationalError as e:
            if attempt >= retries:
                logger.error(f"Failed to connect to database after {attempt + 1} attempts: {e}")
                raise
            logger.warning(
                f"Failed to connect to database - retries remaining: {retries - attempt}"
            )
            attempt += 1
            time.sleep(delay)


# PUBLIC_INTERFACE
def migrate(engine: Engine) -> None:
    """
    Create the tables and constraints for all declared models.

    Args:
        engine: Engine bound to the target database
    """
    # Register the models on Base.metadata
    from user_api.models import user  # noqa: F401

    logger.info("Running database migration")
    Base.metadata.create_all(bind=engine)


def get_session_factory(engine: Engine) -> sessionmaker:
    """
    Create the session factory used by the services.

    Args:
        engine: Engine the sessions are bound to

    Returns:
        sessionmaker: Session factory
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False  # Prevent expired object access after commit
    )


# PUBLIC_INTERFACE
@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """
    Context manager committing the session on success and rolling it back on error.

    Args:
        session (Session): SQLAlchemy session instance

    Yields:
        Session: The active database session

    Raises:
        SQLAlchemyError: If any database operation fails
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise


# PUBLIC_INTERFACE
def init_database(settings: Settings, engine: Optional[Engine] = None) -> sessionmaker:
    """
    Connect to the database, migrate it and return a session factory.

    Args:
        settings: Application settings
        engine: Optional pre-built engine, created from settings when omitted

    Returns:
        sessionmaker: Session factory bound to the ready database
    """
    logger.info("Starting new database connection")
    engine = engine or create_db_engine(settings)
    connect_with_retry(
        engine,
        retries=settings.DB_CONNECT_RETRIES,
        delay=settings.DB_CONNECT_RETRY_DELAY
    )
    migrate(engine)
    return get_session_factory(engine)
