"""
MemoryMatch Services
"""

from services.event_bus import EventBus, SoundCue
from services.score_store import ScoreStore

__all__ = ["EventBus", "SoundCue", "ScoreStore"]
