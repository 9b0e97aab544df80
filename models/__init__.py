"""
MemoryMatch Data Models

SQLAlchemy storage models and pydantic schemas.
"""

from models.base import Base, engine, SessionLocal, get_session, init_db
from models.key_value import KeyValueEntry
from models.schemas import ScoreEntry, ScoreTable, UserPreferences

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_session",
    "init_db",
    "KeyValueEntry",
    "ScoreEntry",
    "ScoreTable",
    "UserPreferences",
]
