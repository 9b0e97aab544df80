"""
Game Engine - Core state machine for a memory-matching game.

The GameEngine runs independently of any rendering. It owns the board,
the pending/solved positions, the move counter and the countdown, and
reports every change through Qt signals and FlipResult values.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from PySide6.QtCore import QObject, Signal
from sqlalchemy.exc import SQLAlchemyError

from config import Difficulty, TierSettings, DIFFICULTY_SETTINGS, IMAGE_PAIRS
from engine.deck import Board, ConfigError, build_board, check_pair_count
from engine.scoring import compute_score
from engine.timer import CountdownTimer
from models.schemas import ScoreEntry

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """State machine states for a single game."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"


class FlipOutcome(Enum):
    """What a flip request did."""
    REJECTED = "rejected"
    REVEALED = "revealed"
    MATCHED = "matched"
    MISMATCHED = "mismatched"


class RejectReason(Enum):
    """Why a flip request was ignored."""
    NOT_RUNNING = "not_running"
    OUT_OF_RANGE = "out_of_range"
    PAIR_PENDING = "pair_pending"
    ALREADY_FACE_UP = "already_face_up"


@dataclass(frozen=True)
class FlipResult:
    """Result of a flip request, consumed by the presentation layer."""
    outcome: FlipOutcome
    position: int
    pair: tuple[int, ...] = ()
    reject_reason: Optional[RejectReason] = None
    token: Optional[int] = None
    phase: GamePhase = GamePhase.RUNNING

    @property
    def accepted(self) -> bool:
        return self.outcome != FlipOutcome.REJECTED


@dataclass(frozen=True)
class RoundState:
    """Snapshot of the current round."""
    flipped: tuple[int, ...] = ()
    solved: frozenset = frozenset()
    moves: int = 0
    time_remaining: int = 0
    phase: GamePhase = GamePhase.NOT_STARTED
    difficulty: Optional[Difficulty] = None
    generation: int = 0


class GameEngine(QObject):
    """
    Core logic for one memory game at a time.

    A mismatched pair stays face-up until resolve_mismatch() is called;
    scheduling that call after the reveal delay is the caller's job.
    Late resolve_mismatch() and tick() calls are ignored once the game
    they belonged to is over or replaced.
    """

    # Signals
    game_started = Signal(object)           # Board
    card_revealed = Signal(int)             # position
    cards_matched = Signal(int, int)        # first, second position
    cards_hidden = Signal(list)             # positions turned face-down
    moves_changed = Signal(int)             # move count
    time_changed = Signal(int)              # seconds remaining
    game_won = Signal(object)               # ScoreEntry
    game_lost = Signal()
    state_changed = Signal(str)             # new phase name

    def __init__(self, score_store=None, timer=None,
                 catalog: Sequence[tuple[str, str]] = IMAGE_PAIRS,
                 tiers: dict[Difficulty, TierSettings] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the game engine.

        Args:
            score_store: Receives record_win() for every won game (optional)
            timer: Tick source with start()/stop() and a tick signal
                   (default: a new CountdownTimer)
            catalog: Ordered image pairs used to build boards
            tiers: Settings per difficulty (default: DIFFICULTY_SETTINGS)
            rng: Random source for shuffling

        Raises:
            ConfigError: If a tier needs more pairs than the catalog holds
        """
        super().__init__()
        self._score_store = score_store
        self._catalog = tuple(catalog)
        self._tiers = dict(tiers or DIFFICULTY_SETTINGS)
        self._rng = rng or random.Random()

        for settings in self._tiers.values():
            check_pair_count(settings.pair_count, self._catalog)

        self._timer = timer if timer is not None else CountdownTimer(parent=self)
        self._timer.tick.connect(self.tick)

        self._phase = GamePhase.NOT_STARTED
        self._generation = 0
        self._pending_token = 0
        self._difficulty: Optional[Difficulty] = None
        self._board = Board(cards=())
        self._reset_state(time_remaining=0)

    def _reset_state(self, time_remaining: int) -> None:
        """Reset all round state to initial values."""
        self._flipped: list[int] = []
        self._solved: set[int] = set()
        self._moves: int = 0
        self._time_remaining: int = time_remaining

    # ============ Properties ============

    @property
    def state(self) -> GamePhase:
        """Current phase of the game."""
        return self._phase

    @state.setter
    def state(self, new_phase: GamePhase) -> None:
        """Set the phase and emit signal."""
        self._phase = new_phase
        self.state_changed.emit(new_phase.value)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def difficulty(self) -> Optional[Difficulty]:
        return self._difficulty

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def time_remaining(self) -> int:
        return self._time_remaining

    @property
    def flipped(self) -> tuple[int, ...]:
        return tuple(self._flipped)

    @property
    def solved(self) -> frozenset:
        return frozenset(self._solved)

    @property
    def generation(self) -> int:
        """Increments on every start(); identifies the current game."""
        return self._generation

    @property
    def pending_token(self) -> int:
        """Identifies the mismatch currently waiting to be hidden."""
        return self._pending_token

    def tier_settings(self, difficulty: Difficulty) -> TierSettings:
        return self._tiers[Difficulty(difficulty)]

    def get_round_state(self) -> RoundState:
        """Get a snapshot of the current round."""
        return RoundState(
            flipped=tuple(self._flipped),
            solved=frozenset(self._solved),
            moves=self._moves,
            time_remaining=self._time_remaining,
            phase=self._phase,
            difficulty=self._difficulty,
            generation=self._generation,
        )

    # ============ Game Lifecycle ============

    def start(self, difficulty: Difficulty) -> Board:
        """
        Start (or restart) a game on the given tier.

        Any running countdown is stopped first and any pending mismatch
        from the previous game is discarded.

        Args:
            difficulty: A Difficulty or its value ("easy", "medium", "hard")

        Returns:
            The new face-down Board

        Raises:
            ValueError: Unknown difficulty
            ConfigError: Tier is not configured or needs more pairs than the
                         catalog holds
        """
        difficulty = Difficulty(difficulty)
        settings = self._tiers.get(difficulty)
        if settings is None:
            raise ConfigError(f"no settings configured for difficulty {difficulty.value!r}")

        self._timer.stop()
        board = build_board(settings.pair_count, self._catalog,
                            rng=self._rng, difficulty=difficulty)

        self._generation += 1
        self._pending_token += 1
        self._difficulty = difficulty
        self._board = board
        self._reset_state(time_remaining=settings.time_limit_s)
        self.state = GamePhase.RUNNING

        self._timer.start()
        logger.info("Game %d started: %s, %d pairs, %ds",
                    self._generation, difficulty.value,
                    settings.pair_count, settings.time_limit_s)

        self.game_started.emit(board)
        self.moves_changed.emit(self._moves)
        self.time_changed.emit(self._time_remaining)
        return board

    def abandon(self) -> None:
        """Stop the current game without a result; flips are rejected until start()."""
        self._timer.stop()
        self._pending_token += 1
        self._flipped.clear()
        if self._phase != GamePhase.NOT_STARTED:
            logger.info("Game %d abandoned", self._generation)
            self.state = GamePhase.NOT_STARTED

    # ============ Player Actions ============

    def flip_card(self, position: int) -> FlipResult:
        """
        Turn a card face-up.

        Invalid requests are normal interaction noise: they return a
        REJECTED result and leave the state untouched.

        Args:
            position: Index of the card on the board

        Returns:
            FlipResult describing what happened
        """
        reason = self._check_flip(position)
        if reason is not None:
            logger.debug("Flip of %r rejected: %s", position, reason.value)
            return FlipResult(FlipOutcome.REJECTED, position,
                              reject_reason=reason, phase=self._phase)

        self._flipped.append(position)
        self._moves += 1
        self.card_revealed.emit(position)
        self.moves_changed.emit(self._moves)

        if len(self._flipped) < 2:
            return FlipResult(FlipOutcome.REVEALED, position)

        first, second = self._flipped
        if self._board[first].image_id == self._board[second].image_id:
            return self._on_match(first, second)

        self._pending_token += 1
        return FlipResult(FlipOutcome.MISMATCHED, position,
                          pair=(first, second), token=self._pending_token)

    def resolve_mismatch(self, token: Optional[int] = None) -> list[int]:
        """
        Turn the pending mismatched pair face-down again.

        Args:
            token: The FlipResult.token of the mismatch being resolved;
                   a stale token makes the call a no-op

        Returns:
            Positions that were hidden (empty if nothing happened)
        """
        if self._phase != GamePhase.RUNNING:
            return []
        if len(self._flipped) < 2:
            return []
        if token is not None and token != self._pending_token:
            logger.debug("Ignoring stale mismatch token %d", token)
            return []

        hidden = [p for p in self._flipped if p not in self._solved]
        self._flipped.clear()
        self.cards_hidden.emit(hidden)
        return hidden

    def tick(self) -> None:
        """Advance the countdown by one second (called by the timer)."""
        if self._phase != GamePhase.RUNNING:
            return

        self._time_remaining = max(0, self._time_remaining - 1)
        self.time_changed.emit(self._time_remaining)

        if self._time_remaining <= 0:
            self._finish_lost()

    def compute_score(self) -> int:
        """Score for the current round state."""
        return compute_score(
            pairs_solved=len(self._solved) // 2,
            time_remaining=self._time_remaining,
            moves=self._moves,
        )

    # ============ Internal ============

    def _check_flip(self, position: int) -> Optional[RejectReason]:
        if self._phase != GamePhase.RUNNING:
            return RejectReason.NOT_RUNNING
        if isinstance(position, bool) or not isinstance(position, int):
            return RejectReason.OUT_OF_RANGE
        if not 0 <= position < len(self._board):
            return RejectReason.OUT_OF_RANGE
        if position in self._flipped or position in self._solved:
            return RejectReason.ALREADY_FACE_UP
        if len(self._flipped) >= 2:
            return RejectReason.PAIR_PENDING
        return None

    def _on_match(self, first: int, second: int) -> FlipResult:
        self._solved.update((first, second))
        self._flipped.clear()
        self.cards_matched.emit(first, second)

        if len(self._solved) == len(self._board):
            self._finish_won()

        return FlipResult(FlipOutcome.MATCHED, second,
                          pair=(first, second), phase=self._phase)

    def _finish_won(self) -> None:
        self._timer.stop()
        self.state = GamePhase.WON

        entry = ScoreEntry(
            score=self.compute_score(),
            moves=self._moves,
            time_remaining=self._time_remaining,
        )
        logger.info("Game %d won: score=%d", self._generation, entry.score)

        if self._score_store is not None:
            try:
                self._score_store.record_win(self._difficulty, entry)
            except SQLAlchemyError:
                logger.exception("Could not save score for game %d", self._generation)
        self.game_won.emit(entry)

    def _finish_lost(self) -> None:
        self._timer.stop()
        self.state = GamePhase.LOST
        logger.info("Game %d lost: time up with %d of %d pairs solved",
                    self._generation, len(self._solved) // 2, self._board.pair_count)
        self.game_lost.emit()
