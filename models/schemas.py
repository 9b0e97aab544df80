"""
Pydantic schemas for persisted data.
"""

from pydantic import BaseModel, ConfigDict, Field

from config import Difficulty


# ============ Score Schemas ============

class ScoreEntry(BaseModel):
    """One finished game on the high-score table."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    score: int = Field(..., ge=0)
    moves: int = Field(..., ge=0)
    time_remaining: int = Field(..., ge=0, alias="timeRemaining")


class ScoreTable(BaseModel):
    """High scores per difficulty tier, each list descending by score."""
    easy: list[ScoreEntry] = Field(default_factory=list)
    medium: list[ScoreEntry] = Field(default_factory=list)
    hard: list[ScoreEntry] = Field(default_factory=list)

    def entries_for(self, difficulty: Difficulty) -> list[ScoreEntry]:
        return getattr(self, difficulty.value)

    def with_entries(self, difficulty: Difficulty, entries: list[ScoreEntry]) -> "ScoreTable":
        """Return a copy with the tier's list replaced."""
        return self.model_copy(update={difficulty.value: list(entries)})

    def to_json(self) -> str:
        """Serialize with the stored field names (timeRemaining)."""
        return self.model_dump_json(by_alias=True)


# ============ Preference Schemas ============

class UserPreferences(BaseModel):
    """User-facing settings kept between sessions."""
    sound_enabled: bool = True
    difficulty: Difficulty = Difficulty.EASY
