"""
Unit tests for the ScoreStore, backed by an in-memory SQLite database.
"""

import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import Difficulty, HIGH_SCORES_KEY
from models.base import get_session, init_db
from models.key_value import KeyValueEntry
from models.schemas import ScoreEntry, ScoreTable
from services.score_store import ScoreStore


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return ScoreStore(session_factory=session_factory)


def write_raw(session_factory, value: str) -> None:
    with get_session(session_factory) as session:
        session.merge(KeyValueEntry(key=HIGH_SCORES_KEY, value=value))


def entry(score: int, moves: int = 10, time_remaining: int = 5) -> ScoreEntry:
    return ScoreEntry(score=score, moves=moves, time_remaining=time_remaining)


class TestLoad:
    """Tests for ScoreStore.load."""

    def test_missing_table_is_empty(self, store):
        table = store.load()

        assert table == ScoreTable()
        assert table.easy == [] and table.medium == [] and table.hard == []

    def test_invalid_json_is_empty(self, store, session_factory):
        write_raw(session_factory, "{not json")

        assert store.load() == ScoreTable()

    def test_wrong_shape_is_empty(self, store, session_factory):
        write_raw(session_factory, json.dumps({"easy": [{"score": "lots"}]}))

        assert store.load() == ScoreTable()

    def test_non_object_is_empty(self, store, session_factory):
        write_raw(session_factory, "null")

        assert store.load() == ScoreTable()

    def test_missing_tier_defaults_to_empty(self, store, session_factory):
        write_raw(session_factory, json.dumps(
            {"easy": [{"score": 300, "moves": 12, "timeRemaining": 8}]}
        ))

        table = store.load()

        assert table.easy == [entry(300, moves=12, time_remaining=8)]
        assert table.hard == []

    def test_database_error_is_empty(self):
        """A broken database never raises from load()."""
        engine = create_engine("sqlite://", poolclass=StaticPool)
        factory = sessionmaker(bind=engine)
        store = ScoreStore(session_factory=factory)  # tables never created

        assert store.load() == ScoreTable()


class TestRecordWin:
    """Tests for ScoreStore.record_win."""

    def test_first_win_is_stored(self, store):
        store.record_win(Difficulty.EASY, entry(725, moves=15, time_remaining=20))

        assert store.top_scores(Difficulty.EASY) == [entry(725, moves=15, time_remaining=20)]

    def test_stored_with_wire_field_names(self, store, session_factory):
        store.record_win(Difficulty.EASY, entry(725, moves=15, time_remaining=20))

        with get_session(session_factory) as session:
            raw = session.get(KeyValueEntry, HIGH_SCORES_KEY).value

        assert json.loads(raw) == {
            "easy": [{"score": 725, "moves": 15, "timeRemaining": 20}],
            "medium": [],
            "hard": [],
        }

    def test_keeps_top_five_descending(self, store):
        for score in [100, 500, 300, 700, 200, 600, 400]:
            store.record_win(Difficulty.MEDIUM, entry(score))

        scores = [e.score for e in store.top_scores(Difficulty.MEDIUM)]
        assert scores == [700, 600, 500, 400, 300]

    def test_low_score_does_not_enter_full_table(self, store):
        for score in [900, 800, 700, 600, 500]:
            store.record_win(Difficulty.HARD, entry(score))

        store.record_win(Difficulty.HARD, entry(10))

        assert [e.score for e in store.top_scores(Difficulty.HARD)] == [900, 800, 700, 600, 500]

    def test_ties_keep_earlier_entry_first(self, store):
        store.record_win(Difficulty.EASY, entry(500, moves=10))
        store.record_win(Difficulty.EASY, entry(500, moves=20))

        assert [e.moves for e in store.top_scores(Difficulty.EASY)] == [10, 20]

    def test_tiers_are_independent(self, store):
        store.record_win(Difficulty.EASY, entry(100))
        store.record_win(Difficulty.HARD, entry(900))

        table = store.load()
        assert [e.score for e in table.easy] == [100]
        assert table.medium == []
        assert [e.score for e in table.hard] == [900]

    def test_accepts_tier_value(self, store):
        store.record_win("medium", entry(250))

        assert [e.score for e in store.top_scores(Difficulty.MEDIUM)] == [250]

    def test_record_after_corrupt_data_starts_fresh(self, store, session_factory):
        write_raw(session_factory, "garbage")

        store.record_win(Difficulty.EASY, entry(400))

        assert [e.score for e in store.top_scores(Difficulty.EASY)] == [400]

    def test_returns_updated_list(self, store):
        result = store.record_win(Difficulty.EASY, entry(400))

        assert result == [entry(400)]


class TestClear:
    """Tests for ScoreStore.clear."""

    def test_clear_removes_scores(self, store):
        store.record_win(Difficulty.EASY, entry(400))

        store.clear()

        assert store.load() == ScoreTable()

    def test_clear_when_empty(self, store):
        store.clear()

        assert store.load() == ScoreTable()
