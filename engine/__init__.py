"""
MemoryMatch Game Engine

Core game logic for the memory-matching game.
This module contains no rendering dependencies.
"""

from engine.deck import Card, Board, ConfigError, build_board
from engine.game import (
    GameEngine, GamePhase, FlipOutcome, FlipResult, RejectReason, RoundState,
)
from engine.scoring import compute_score
from engine.timer import CountdownTimer

__all__ = [
    "Card",
    "Board",
    "ConfigError",
    "build_board",
    "GameEngine",
    "GamePhase",
    "FlipOutcome",
    "FlipResult",
    "RejectReason",
    "RoundState",
    "compute_score",
    "CountdownTimer",
]
