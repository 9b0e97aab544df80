"""
Deck - Card and board construction for a memory game.

A board holds two cards per catalog pair in uniformly random order.
"""

import random
from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from config import Difficulty


class ConfigError(ValueError):
    """Raised when the tier settings cannot be served by the image catalog."""


@dataclass(frozen=True)
class Card:
    """A single card. Two cards share each image_id."""
    position: int
    image_id: str
    face: str


@dataclass(frozen=True)
class Board:
    """The shuffled, immutable card sequence for one game."""
    cards: tuple[Card, ...]
    difficulty: Optional[Difficulty] = None

    def __len__(self) -> int:
        return len(self.cards)

    def __getitem__(self, position: int) -> Card:
        return self.cards[position]

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def pair_count(self) -> int:
        return len(self.cards) // 2

    def image_counts(self) -> Counter:
        """Count how many cards reference each image_id."""
        return Counter(card.image_id for card in self.cards)


def check_pair_count(pair_count: int, catalog: Sequence[tuple[str, str]]) -> None:
    """Raise ConfigError if the catalog cannot supply pair_count pairs."""
    if pair_count < 1:
        raise ConfigError(f"pair count must be positive, got {pair_count}")
    if pair_count > len(catalog):
        raise ConfigError(
            f"pair count {pair_count} exceeds image catalog size {len(catalog)}"
        )


def build_board(pair_count: int, catalog: Sequence[tuple[str, str]],
                rng: Optional[random.Random] = None,
                difficulty: Optional[Difficulty] = None) -> Board:
    """
    Build a shuffled board from the first pair_count catalog pairs.

    Args:
        pair_count: Number of pairs to place on the board
        catalog: Ordered (face_a, face_b) image pairs
        rng: Random source (default: a fresh random.Random)
        difficulty: Tier the board was built for

    Returns:
        A Board of 2 * pair_count cards

    Raises:
        ConfigError: If pair_count exceeds the catalog size
    """
    check_pair_count(pair_count, catalog)
    rng = rng or random.Random()

    # (image_id, face) for both halves of every selected pair
    faces: list[tuple[str, str]] = []
    for face_a, face_b in catalog[:pair_count]:
        faces.append((face_a, face_a))
        faces.append((face_a, face_b))

    # random.shuffle is Fisher-Yates: every ordering is equally likely
    rng.shuffle(faces)

    cards = tuple(
        Card(position=index, image_id=image_id, face=face)
        for index, (image_id, face) in enumerate(faces)
    )
    return Board(cards=cards, difficulty=difficulty)
