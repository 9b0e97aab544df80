"""
User preferences persisted to settings.json in the config directory.
"""

import logging
from pathlib import Path

from config import PATHS
from models.schemas import UserPreferences

logger = logging.getLogger(__name__)


def load_preferences(path: Path = None) -> UserPreferences:
    """Load saved preferences, falling back to defaults if missing or corrupt."""
    path = path or PATHS.settings
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return UserPreferences()
    except OSError as e:
        logger.warning("Could not read preferences from %s: %s", path, e)
        return UserPreferences()

    try:
        return UserPreferences.model_validate_json(raw)
    except ValueError:
        # ValidationError, including undecodable or malformed JSON
        logger.warning("Ignoring corrupt preferences file %s", path)
        return UserPreferences()


def save_preferences(preferences: UserPreferences, path: Path = None) -> None:
    """Write preferences as JSON, creating the parent directory if needed."""
    path = path or PATHS.settings
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(preferences.model_dump_json(indent=2), encoding="utf-8")
