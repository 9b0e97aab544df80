"""
Event Bus - Central signal hub between the game and its presentation.

The presentation layer connects to this single object rather than to the
engine directly: it renders boards, reveals and hides cards, plays sound
cues and shows the end-of-game screen in response to these signals.
"""

from enum import Enum

from PySide6.QtCore import QObject, Signal


class SoundCue(Enum):
    """Sound clips the presentation layer can play."""
    FLIP = "flip"
    MATCH = "match"
    VICTORY = "victory"
    DEFEAT = "defeat"


class EventBus(QObject):
    """
    Central signal hub for MemoryMatch.

    Usage:
        # In MemoryMatchApp
        self.event_bus.card_revealed.emit(position)

        # In a board widget
        self.event_bus.card_revealed.connect(self._on_card_revealed)
    """

    # ============ Game Lifecycle ============
    board_ready = Signal(object)        # Board, all cards face-down
    game_over = Signal(object)          # GameSummary
    start_prompt = Signal()             # show the "press start" message

    # ============ Card Events ============
    card_revealed = Signal(int)         # position
    cards_matched = Signal(int, int)    # first, second position
    cards_hidden = Signal(list)         # positions turned face-down

    # ============ Display Updates ============
    moves_changed = Signal(int)         # move count
    time_changed = Signal(int)          # seconds remaining

    # ============ Settings ============
    difficulty_changed = Signal(str)    # tier value
    sound_toggled = Signal(bool)        # sound enabled
    sound_cue = Signal(str)             # SoundCue value

    def __init__(self):
        super().__init__()

    def emit_sound(self, cue: SoundCue) -> None:
        """Convenience method to request a sound clip."""
        self.sound_cue.emit(cue.value)
