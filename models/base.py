"""
Database configuration and base model.

Uses SQLAlchemy 2.0 declarative style with SQLite.
"""

from pathlib import Path
from contextlib import contextmanager
from typing import Callable, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import PATHS


def get_database_path() -> Path:
    """Get the path to the SQLite database file."""
    return PATHS.database


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# Engine is created lazily by SQLAlchemy; no file is touched until first use
DATABASE_URL = f"sqlite:///{get_database_path()}"
engine = create_engine(DATABASE_URL, echo=False)

# Session factory
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@contextmanager
def get_session(factory: Optional[Callable[[], Session]] = None) -> Generator[Session, None, None]:
    """Context manager for database sessions."""
    session = (factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind=None) -> None:
    """Initialize the database, creating all tables."""
    if bind is None:
        PATHS.ensure_directories()
        bind = engine
    Base.metadata.create_all(bind=bind)

