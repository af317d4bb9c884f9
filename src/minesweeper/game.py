"""
Owner of a single game.

``Game`` holds the current ``GameState`` and the settings store, applies
engine transitions one at a time and persists difficulty changes.
Callers must not invoke it concurrently.
"""
import logging
import random
from typing import Optional

from . import engine
from .board import CUSTOM_LEVEL
from .engine import GameState, GameStatus
from .settings import (
    GameSettings,
    MemorySettingsStore,
    SettingsStore,
    load_settings,
    save_settings,
)

logger = logging.getLogger(__name__)


class Game:
    """
    Stateful front for the board engine.

    Each action method returns True if the state changed.
    """

    def __init__(
        self,
        store: Optional[SettingsStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the game from stored settings.

        Args:
            store: Settings key-value store (in-memory if omitted).
            rng: Random source for mine placement.
        """
        self.store = store if store is not None else MemorySettingsStore()
        self.rng = rng
        settings = load_settings(self.store)
        self.state = engine.new_game(
            settings.to_config(), settings.difficulty_level or CUSTOM_LEVEL
        )

    def _apply(self, next_state: GameState) -> bool:
        if next_state is self.state:
            return False
        previous = self.state.status
        self.state = next_state
        if next_state.status != previous:
            logger.debug(
                "Game status %s -> %s", previous.value, next_state.status.value
            )
        return True

    # ========================================================================
    # Actions
    # ========================================================================

    def reset(self) -> bool:
        """Start a new game with the same board size."""
        return self._apply(engine.init_game(self.state))

    def reveal(self, row: int, col: int) -> bool:
        return self._apply(engine.reveal_cell(self.state, row, col, self.rng))

    def flag(self, row: int, col: int) -> bool:
        return self._apply(engine.toggle_flag(self.state, row, col))

    def chord(self, row: int, col: int) -> bool:
        return self._apply(engine.area_open(self.state, row, col))

    def tick(self) -> bool:
        return self._apply(engine.tick_timer(self.state))

    def set_difficulty(self, tier: str) -> bool:
        """Switch to a preset tier and remember it."""
        self._apply(engine.set_difficulty(self.state, tier))
        self._save()
        return True

    def set_custom_difficulty(self, width: int, height: int, mines: int) -> bool:
        """Switch to a custom board and remember it."""
        self._apply(
            engine.set_custom_difficulty(self.state, width, height, mines)
        )
        self._save()
        return True

    def _save(self) -> None:
        logger.debug(
            "Difficulty set to %s (%dx%d, %d mines)",
            self.state.difficulty_level,
            self.state.board_width,
            self.state.board_height,
            self.state.mine_count,
        )
        save_settings(self.store, self.settings)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def settings(self) -> GameSettings:
        """Settings record describing the current board."""
        return GameSettings(
            self.state.board_width,
            self.state.board_height,
            self.state.mine_count,
            self.state.difficulty_level,
        )

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def is_over(self) -> bool:
        return self.state.is_over
