"""
MemoryMatch Application Controller

Top-level controller that wires the game engine, the score store and the
user preferences to the presentation-facing event bus.
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from config import Difficulty, TIMER_SETTINGS, init_config
from engine.game import GameEngine, FlipOutcome, FlipResult
from engine.deck import Board
from models.base import init_db
from models.schemas import ScoreEntry, UserPreferences
from services.event_bus import EventBus, SoundCue
from services.preferences import load_preferences, save_preferences
from services.score_store import ScoreStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSummary:
    """Everything the end-of-game screen shows."""
    won: bool
    difficulty: Difficulty
    score: Optional[int]
    moves: int
    time_remaining: int
    high_scores: list[ScoreEntry] = field(default_factory=list)


class MemoryMatchApp(QObject):
    """
    Top-level application controller.
    Wires together all application components.
    """

    def __init__(self, engine: Optional[GameEngine] = None,
                 score_store: Optional[ScoreStore] = None,
                 preferences: Optional[UserPreferences] = None,
                 schedule: Optional[Callable[[int, Callable[[], None]], None]] = None,
                 persist_preferences: bool = True):
        """
        Initialize the controller.

        Args:
            engine: Game engine (default: a new GameEngine using score_store)
            score_store: High-score persistence (default: ScoreStore on the app database)
            preferences: Initial preferences (default: loaded from settings.json)
            schedule: Delayed-call scheduler taking (ms, callback)
                      (default: QTimer.singleShot)
            persist_preferences: Save preference changes to settings.json
        """
        super().__init__()

        if score_store is None:
            init_db()
            score_store = ScoreStore()
        self.score_store = score_store

        self.preferences = preferences if preferences is not None else load_preferences()
        self._persist_preferences = persist_preferences
        self._schedule = schedule or QTimer.singleShot

        self.event_bus = EventBus()
        self.engine = engine if engine is not None else GameEngine(score_store=score_store)

        # Wire up engine signals to event bus
        self.engine.game_started.connect(self._on_game_started)
        self.engine.card_revealed.connect(self._on_card_revealed)
        self.engine.cards_matched.connect(self._on_cards_matched)
        self.engine.cards_hidden.connect(self.event_bus.cards_hidden.emit)
        self.engine.moves_changed.connect(self.event_bus.moves_changed.emit)
        self.engine.time_changed.connect(self.event_bus.time_changed.emit)
        self.engine.game_won.connect(self._on_game_won)
        self.engine.game_lost.connect(self._on_game_lost)

    # ============ User Actions ============

    @property
    def difficulty(self) -> Difficulty:
        return self.preferences.difficulty

    @property
    def sound_enabled(self) -> bool:
        return self.preferences.sound_enabled

    def new_game(self) -> Board:
        """Start a new game on the selected difficulty (reset button)."""
        return self.engine.start(self.difficulty)

    def select_difficulty(self, difficulty: Difficulty) -> None:
        """Change the tier; the running game is abandoned until new_game()."""
        difficulty = Difficulty(difficulty)
        self.engine.abandon()
        self._update_preferences(difficulty=difficulty)
        self.event_bus.difficulty_changed.emit(difficulty.value)
        self.event_bus.start_prompt.emit()

    def toggle_sound(self) -> bool:
        """Turn sound cues on or off. Returns the new setting."""
        enabled = not self.sound_enabled
        self._update_preferences(sound_enabled=enabled)
        self.event_bus.sound_toggled.emit(enabled)
        return enabled

    def flip_card(self, position: int) -> FlipResult:
        """
        Handle a click on a card.

        A mismatched pair is hidden again after the reveal delay.
        """
        result = self.engine.flip_card(position)
        if result.outcome == FlipOutcome.MISMATCHED:
            self._schedule(TIMER_SETTINGS.reveal_delay_ms,
                           partial(self.engine.resolve_mismatch, result.token))
        return result

    def high_scores(self, difficulty: Optional[Difficulty] = None) -> list[ScoreEntry]:
        """Top entries for a tier (default: the selected one)."""
        return self.score_store.top_scores(difficulty or self.difficulty)

    # ============ Engine Events ============

    def _on_game_started(self, board: Board) -> None:
        self.event_bus.board_ready.emit(board)

    def _on_card_revealed(self, position: int) -> None:
        self._play(SoundCue.FLIP)
        self.event_bus.card_revealed.emit(position)

    def _on_cards_matched(self, first: int, second: int) -> None:
        self._play(SoundCue.MATCH)
        self.event_bus.cards_matched.emit(first, second)

    def _on_game_won(self, entry: ScoreEntry) -> None:
        self._play(SoundCue.VICTORY)
        self._show_summary(won=True, score=entry.score)

    def _on_game_lost(self) -> None:
        self._play(SoundCue.DEFEAT)
        self._show_summary(won=False, score=None)

    def _show_summary(self, won: bool, score: Optional[int]) -> None:
        difficulty = self.engine.difficulty
        summary = GameSummary(
            won=won,
            difficulty=difficulty,
            score=score,
            moves=self.engine.moves,
            time_remaining=self.engine.time_remaining,
            high_scores=self.score_store.top_scores(difficulty),
        )
        self.event_bus.game_over.emit(summary)

    def _play(self, cue: SoundCue) -> None:
        if self.sound_enabled:
            self.event_bus.emit_sound(cue)

    def _update_preferences(self, **changes) -> None:
        self.preferences = self.preferences.model_copy(update=changes)
        if self._persist_preferences:
            save_preferences(self.preferences)


def create_app() -> MemoryMatchApp:
    """Initialize configuration and logging, then build the controller."""
    init_config()
    app = MemoryMatchApp()
    logger.info("MemoryMatch ready (difficulty=%s, sound=%s)",
                app.difficulty.value, app.sound_enabled)
    return app
