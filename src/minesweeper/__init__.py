"""
Minesweeper game module.

Provides the board engine (mine placement, flood-fill reveal, flags,
chording, win/loss detection), settings persistence, text rendering
and a Gymnasium environment.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    InvalidSettingsError,
    UnknownDifficultyError,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTY_PRESETS,
    generate_mines,
    get_preset,
    preset_name,
)
from .engine import (
    GameState,
    GameStatus,
    new_game,
    init_game,
    reveal_cell,
    toggle_flag,
    area_open,
    tick_timer,
    set_difficulty,
    set_custom_difficulty,
)
from .settings import (
    GAME_SETTINGS_KEY,
    GameSettings,
    JsonFileSettingsStore,
    MemorySettingsStore,
    SettingsStore,
    load_settings,
    save_settings,
)
from .game import Game
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "InvalidSettingsError",
    "UnknownDifficultyError",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTY_PRESETS",
    "generate_mines",
    "get_preset",
    "preset_name",
    "GameState",
    "GameStatus",
    "new_game",
    "init_game",
    "reveal_cell",
    "toggle_flag",
    "area_open",
    "tick_timer",
    "set_difficulty",
    "set_custom_difficulty",
    "GAME_SETTINGS_KEY",
    "GameSettings",
    "JsonFileSettingsStore",
    "MemorySettingsStore",
    "SettingsStore",
    "load_settings",
    "save_settings",
    "Game",
    "MinesweeperEnv",
]
