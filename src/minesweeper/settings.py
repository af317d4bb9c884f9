"""
Persisted game settings.

The settings record ``{width, height, mines, difficultyLevel}`` is kept in
a key-value store under a fixed key. Read and write failures never reach
the game: a missing or unreadable record falls back to the default tier,
and a failed write is logged and ignored.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from .board import DEFAULT_DIFFICULTY, BoardConfig, get_preset

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

GAME_SETTINGS_KEY = "minesweeper-game-settings"


# ============================================================================
# Settings Record
# ============================================================================

@dataclass
class GameSettings:
    """
    Board size chosen by the player.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines: Number of mines.
        difficulty_level: Preset name, "CUSTOM", or None if unknown.
    """

    width: int
    height: int
    mines: int
    difficulty_level: Optional[str] = None

    @classmethod
    def for_tier(cls, tier: str) -> "GameSettings":
        """Settings matching a preset tier."""
        config = get_preset(tier)
        return cls(config.width, config.height, config.num_mines, tier.upper())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        """
        Build settings from the stored JSON shape.

        Raises:
            ValueError: If a required field is missing or not an integer.
        """
        values = {}
        for key in ("width", "height", "mines"):
            value = data.get(key)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Settings field {key!r} must be an integer")
            values[key] = value
        level = data.get("difficultyLevel")
        if level is not None and not isinstance(level, str):
            raise ValueError("Settings field 'difficultyLevel' must be a string")
        return cls(difficulty_level=level, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored JSON shape."""
        data: Dict[str, Any] = {
            "width": self.width,
            "height": self.height,
            "mines": self.mines,
        }
        if self.difficulty_level is not None:
            data["difficultyLevel"] = self.difficulty_level
        return data

    def to_config(self) -> BoardConfig:
        """Board configuration for these settings."""
        return BoardConfig(self.width, self.height, self.mines)


DEFAULT_SETTINGS = GameSettings.for_tier(DEFAULT_DIFFICULTY)


# ============================================================================
# Key-Value Stores
# ============================================================================

class SettingsStore(Protocol):
    """String key-value store holding the settings record."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemorySettingsStore:
    """In-process key-value store, used by tests and throwaway sessions."""

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileSettingsStore:
    """
    Key-value store backed by a single JSON object on disk.

    Each key maps to a string value, mirroring browser local storage.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


# ============================================================================
# Load / Save
# ============================================================================

def load_settings(store: SettingsStore) -> GameSettings:
    """
    Load settings from a store, falling back to the default tier.

    A record is accepted whenever it describes a board ``BoardConfig``
    can hold. The custom input range is not re-applied, so a record
    edited to a 200-column board loads as written.

    Args:
        store: Store to read the record from.

    Returns:
        Stored settings, or the default tier if absent or unreadable.
    """
    try:
        raw = store.get(GAME_SETTINGS_KEY)
        if raw is None:
            return DEFAULT_SETTINGS
        settings = GameSettings.from_dict(json.loads(raw))
        settings.to_config()
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable game settings: %s", exc)
        return DEFAULT_SETTINGS
    return settings


def save_settings(store: SettingsStore, settings: GameSettings) -> bool:
    """
    Write settings to a store.

    Args:
        store: Store to write the record to.
        settings: Settings to persist.

    Returns:
        True if saved, False if the store rejected the write.
    """
    try:
        store.set(GAME_SETTINGS_KEY, json.dumps(settings.to_dict()))
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Game settings not saved: %s", exc)
        return False
    logger.debug("Saved game settings %s", settings.to_dict())
    return True
