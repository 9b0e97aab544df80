"""
Score Store - Persisted top-5 high-score table per difficulty.

The whole table is kept as one JSON string under a fixed key in the
key-value store. Reads fail soft: a missing or corrupt value is treated
as "no scores yet".
"""

import logging
from typing import Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import Difficulty, HIGH_SCORES_KEY, HIGH_SCORE_LIMIT
from models.base import get_session
from models.key_value import KeyValueEntry
from models.schemas import ScoreEntry, ScoreTable

logger = logging.getLogger(__name__)


class ScoreStore:
    """
    Loads and updates the high-score table.

    Usage:
        store = ScoreStore()
        store.record_win(Difficulty.EASY, ScoreEntry(score=725, moves=15, time_remaining=20))
        top = store.top_scores(Difficulty.EASY)
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None,
                 key: str = HIGH_SCORES_KEY, limit: int = HIGH_SCORE_LIMIT):
        """
        Initialize the store.

        Args:
            session_factory: SQLAlchemy session factory (default: SessionLocal)
            key: Storage key for the serialized table
            limit: Entries kept per tier
        """
        self._session_factory = session_factory
        self._key = key
        self._limit = limit

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> ScoreTable:
        """Return the stored table, or an empty one if missing or unreadable."""
        try:
            with get_session(self._session_factory) as session:
                row = session.get(KeyValueEntry, self._key)
                raw = row.value if row is not None else None
        except SQLAlchemyError as e:
            logger.warning("Could not read high scores: %s", e)
            return ScoreTable()

        if raw is None:
            return ScoreTable()
        return self._parse(raw)

    def record_win(self, difficulty: Difficulty, entry: ScoreEntry) -> list[ScoreEntry]:
        """
        Add a winning game to the tier's table and keep the best entries.

        Args:
            difficulty: Tier the game was played on
            entry: The finished game's score

        Returns:
            The tier's updated list, descending by score
        """
        difficulty = Difficulty(difficulty)
        table = self.load()

        entries = table.entries_for(difficulty) + [entry]
        # sorted() is stable: earlier entries stay ahead on equal scores
        entries = sorted(entries, key=lambda e: e.score, reverse=True)[:self._limit]

        self._save(table.with_entries(difficulty, entries))
        logger.info("Recorded %s win: score=%d moves=%d time_remaining=%d",
                    difficulty.value, entry.score, entry.moves, entry.time_remaining)
        return entries

    def top_scores(self, difficulty: Difficulty) -> list[ScoreEntry]:
        """Get the tier's high-score list."""
        return self.load().entries_for(Difficulty(difficulty))

    def clear(self) -> None:
        """Delete all stored high scores."""
        with get_session(self._session_factory) as session:
            row = session.get(KeyValueEntry, self._key)
            if row is not None:
                session.delete(row)

    def _save(self, table: ScoreTable) -> None:
        with get_session(self._session_factory) as session:
            row = session.get(KeyValueEntry, self._key)
            if row is None:
                session.add(KeyValueEntry(key=self._key, value=table.to_json()))
            else:
                row.value = table.to_json()

    def _parse(self, raw: str) -> ScoreTable:
        try:
            return ScoreTable.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding corrupt high-score data under %r: %s",
                           self._key, e.error_count())
            return ScoreTable()
