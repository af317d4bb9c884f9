"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over the board engine, with reveal,
flag and chord actions.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import CUSTOM_LEVEL, BoardConfig, preset_name
from .display import render_board
from .engine import GameStatus
from .game import Game
from .settings import GameSettings, MemorySettingsStore, save_settings


# ============================================================================
# Constants
# ============================================================================

REVEAL = 0
FLAG = 1
CHORD = 2
ACTION_KINDS = (REVEAL, FLAG, CHORD)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with neighboring mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 3 * width * height.
        Action a has kind a // cells (0 reveal, 1 flag, 2 chord) and
        targets cell a % cells, i.e. (cell // width, cell % width).

    Rewards:
        - +1 for a move that opens safe cells
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for a move that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: beginner preset).
            render_mode: How to render the environment.
        """
        super().__init__()

        store = MemorySettingsStore()
        if config is not None:
            save_settings(
                store,
                GameSettings(
                    config.width,
                    config.height,
                    config.num_mines,
                    preset_name(config) or CUSTOM_LEVEL,
                ),
            )
        self.game = Game(store)
        self.config = self.game.state.board.config
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        self._cells = self.config.height * self.config.width
        self.action_space = spaces.Discrete(len(ACTION_KINDS) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.reset()
        self._steps = 0
        return self.game.state.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded (kind, cell) action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, row, col = self.decode_action(action)
        self._steps += 1

        reward = self._apply_action(kind, row, col)

        observation = self.game.state.board.get_observation()
        terminated = self.game.is_over
        truncated = False

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert a flat action index to (kind, row, col)."""
        kind, cell = divmod(int(action), self._cells)
        row, col = divmod(cell, self.config.width)
        return kind, row, col

    def encode_action(self, kind: int, row: int, col: int) -> int:
        """Convert (kind, row, col) to a flat action index."""
        return kind * self._cells + row * self.config.width + col

    def _apply_action(self, kind: int, row: int, col: int) -> float:
        """
        Perform an action and compute its reward.

        Args:
            kind: REVEAL, FLAG or CHORD.
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        if kind == FLAG:
            return 0.0 if self.game.flag(row, col) else -0.1

        if kind == CHORD:
            changed = self.game.chord(row, col)
        else:
            changed = self.game.reveal(row, col)

        if not changed:
            return -0.1
        if self.game.status == GameStatus.WON:
            return 10.0
        if self.game.status == GameStatus.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        state = self.game.state
        return {
            "steps": self._steps,
            "revealed": state.board.revealed_count,
            "total_safe": self._cells - state.mine_count,
            "game_state": state.status.name,
            "remaining_mines": state.remaining_mines,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.game.state)
        if self.render_mode == "human":
            print(render_board(self.game.state))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the game.

        Returns:
            int8 array where 1 = legal action, usable as a
            ``Discrete.sample`` mask.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self.game.is_over:
            return mask

        board = self.game.state.board
        for cell in board.cells():
            if cell.is_hidden:
                mask[self.encode_action(REVEAL, cell.row, cell.col)] = 1
            if not cell.is_revealed:
                mask[self.encode_action(FLAG, cell.row, cell.col)] = 1
            elif self._can_chord(cell.row, cell.col):
                mask[self.encode_action(CHORD, cell.row, cell.col)] = 1
        return mask

    def _can_chord(self, row: int, col: int) -> bool:
        board = self.game.state.board
        cell = board.cell(row, col)
        if cell.is_mine or cell.neighbor_mines == 0:
            return False
        flags = 0
        closed = 0
        for neighbor_row, neighbor_col in board.get_neighbors(row, col):
            neighbor = board.cell(neighbor_row, neighbor_col)
            if neighbor.is_flagged:
                flags += 1
            elif not neighbor.is_revealed:
                closed += 1
        return flags == cell.neighbor_mines and closed > 0

    def get_reveal_mask(self) -> np.ndarray:
        """Mask limited to legal reveal actions."""
        mask = self.get_action_mask()
        mask[self._cells:] = 0
        return mask
