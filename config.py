"""
MemoryMatch Configuration

Centralized settings, paths, difficulty tiers and the image catalog.
"""

import enum
import logging
from pathlib import Path
from dataclasses import dataclass
import appdirs


# Application info
APP_NAME = "MemoryMatch"
APP_AUTHOR = "MemoryMatch"
APP_VERSION = "1.0.0"


@dataclass(frozen=True)
class Paths:
    """Application paths."""
    # Data directory (stores database)
    data_dir: Path = Path(appdirs.user_data_dir(APP_NAME, APP_AUTHOR))

    # Config directory (stores user preferences)
    config_dir: Path = Path(appdirs.user_config_dir(APP_NAME, APP_AUTHOR))

    # Log directory
    log_dir: Path = Path(appdirs.user_log_dir(APP_NAME, APP_AUTHOR))

    @property
    def database(self) -> Path:
        return self.data_dir / "memorymatch.db"

    @property
    def settings(self) -> Path:
        return self.config_dir / "settings.json"

    @property
    def log_file(self) -> Path:
        return self.log_dir / "memorymatch.log"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        for dir_path in [self.data_dir, self.config_dir, self.log_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class TimerSettings:
    """Timer-related settings."""
    # Countdown tick interval in milliseconds (one game second)
    tick_interval_ms: int = 1000

    # How long a mismatched pair stays face-up before it is hidden again
    reveal_delay_ms: int = 1000


class Difficulty(enum.Enum):
    """The three fixed difficulty tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class TierSettings:
    """Board size and time limit for one difficulty tier."""
    pair_count: int
    time_limit_s: int


DIFFICULTY_SETTINGS: dict[Difficulty, TierSettings] = {
    Difficulty.EASY: TierSettings(pair_count=6, time_limit_s=60),
    Difficulty.MEDIUM: TierSettings(pair_count=8, time_limit_s=90),
    Difficulty.HARD: TierSettings(pair_count=12, time_limit_s=120),
}

# Ordered image catalog. Each entry is one pair: the two cards of a pair
# share an identity but show their own face image.
IMAGE_PAIRS: tuple[tuple[str, str], ...] = (
    ("image/image1.jpg", "image/image2.jpg"),
    ("image/image5.jpg", "image/image6.jpg"),
    ("image/image9.jpg", "image/image10.jpg"),
    ("image/image13.jpg", "image/image14.jpg"),
    ("image/image17.jpg", "image/image18.jpg"),
    ("image/image21.jpg", "image/image22.jpg"),
    ("image/image25.jpg", "image/image26.jpg"),
    ("image/image29.jpg", "image/image30.jpg"),
    ("image/image33.jpg", "image/image34.jpg"),
    ("image/image37.jpg", "image/image38.jpg"),
    ("image/image41.jpg", "image/image42.jpg"),
    ("image/image45.jpg", "image/image46.jpg"),
)

# Storage key for the serialized high-score table
HIGH_SCORES_KEY = "memoryGameHighScores"

# Number of entries kept per tier
HIGH_SCORE_LIMIT = 5

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# Singleton instances
PATHS = Paths()
TIMER_SETTINGS = TimerSettings()


def setup_logging(level: int = logging.INFO, log_file: Path = None) -> None:
    """Configure root logging to stderr and the application log file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


def init_config() -> None:
    """Initialize configuration, create required directories and start logging."""
    PATHS.ensure_directories()
    setup_logging(log_file=PATHS.log_file)
