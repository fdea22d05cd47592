"""
Database connection and session management.

Provides the lazily created engine and session factory, the unit of work
used by media intake, and helper functions for database operations.
"""

from contextlib import contextmanager
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from media_archive.config.settings import get_settings
from media_archive.catalog.events import register_blob_cleanup
from media_archive.catalog.models import Base
from media_archive.storage.media_files import MediaFilesystem


@lru_cache()
def get_engine() -> Engine:
    """
    Create the database engine from settings.

    Server databases get a connection pool (pre-ping, hourly recycle);
    SQLite keeps SQLAlchemy's default pool.
    """
    settings = get_settings()
    if settings.database_url.startswith("sqlite"):
        return create_engine(settings.database_url, echo=settings.debug)

    return create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=settings.debug,
    )


@lru_cache()
def get_session_factory() -> sessionmaker:
    # Rows returned by store() must stay readable after the session closes
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=get_engine(),
    )


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize database by creating all tables.

    Production deployments should run the Alembic migrations instead.
    """
    Base.metadata.create_all(bind=engine or get_engine())


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_db_session() as db:
            db.query(Media).all()
    """
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def unit_of_work(
    session_factory: Optional[sessionmaker] = None,
    files: Optional[MediaFilesystem] = None,
) -> Generator[Session, None, None]:
    """
    One atomic unit of work.

    Commits on success and rolls back on any exception. With ``files``,
    blobs of media deleted inside the unit are removed after the commit.
    """
    db = (session_factory or get_session_factory())()
    if files is not None:
        register_blob_cleanup(db, files)
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_database_connection() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        True if connection is successful, False otherwise
    """
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def reset_database() -> None:
    """Drop the cached engine and session factory (useful for testing)."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
    get_session_factory.cache_clear()
