"""
Board module for Minesweeper game.

Implements the board grid with deferred mine placement, neighbor
counting and the breadth-first flood fill used when revealing cells.
"""
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell


# ============================================================================
# Constants
# ============================================================================

MIN_CUSTOM_SIZE = 8
MAX_CUSTOM_SIZE = 100
CUSTOM_LEVEL = "CUSTOM"


class InvalidSettingsError(ValueError):
    """Raised when board settings cannot describe a playable board."""


class UnknownDifficultyError(KeyError):
    """Raised when a difficulty tier name is not one of the presets."""


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 8
    height: int = 8
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidSettingsError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidSettingsError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidSettingsError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @classmethod
    def clamp_custom(cls, width: int, height: int, mines: int) -> "BoardConfig":
        """
        Build a configuration from values typed in by a player.

        Width and height are pulled into [8, 100], then the mine count
        into [1, width * height // 3] for the adjusted size.
        """
        width = min(MAX_CUSTOM_SIZE, max(MIN_CUSTOM_SIZE, width))
        height = min(MAX_CUSTOM_SIZE, max(MIN_CUSTOM_SIZE, height))
        mines = min(max_custom_mines(width, height), max(1, mines))
        return cls(width, height, mines)


def max_custom_mines(width: int, height: int) -> int:
    """Largest mine count offered for a custom board (a third of the cells)."""
    return (width * height) // 3


# Preset difficulty levels
BEGINNER = BoardConfig(8, 8, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(32, 16, 100)

DIFFICULTY_PRESETS: Dict[str, BoardConfig] = {
    "BEGINNER": BEGINNER,
    "INTERMEDIATE": INTERMEDIATE,
    "EXPERT": EXPERT,
}

DEFAULT_DIFFICULTY = "BEGINNER"


def get_preset(tier: str) -> BoardConfig:
    """
    Look up a preset configuration by tier name (case-insensitive).

    Raises:
        UnknownDifficultyError: If the tier is not a known preset.
    """
    try:
        return DIFFICULTY_PRESETS[tier.upper()]
    except KeyError:
        raise UnknownDifficultyError(tier) from None


def preset_name(config: BoardConfig) -> Optional[str]:
    """Name of the preset tier matching a configuration, if any."""
    for name, preset in DIFFICULTY_PRESETS.items():
        if preset == config:
            return name
    return None


# ============================================================================
# Mine Generation
# ============================================================================

def generate_mines(
    total_cells: int,
    mine_count: int,
    exclude_index: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Set[int]:
    """
    Pick distinct linear cell indices for the mines.

    Samples uniformly and rejects collisions and the excluded index
    until the set reaches the requested size.

    Args:
        total_cells: Number of cells on the board.
        mine_count: Number of mines to place.
        exclude_index: Linear index that must stay mine-free.
        rng: Random source, defaults to the module-level generator.

    Returns:
        Set of ``mine_count`` linear indices.
    """
    available = total_cells - (1 if exclude_index is not None else 0)
    if mine_count > available:
        raise ValueError(
            f"Cannot place {mine_count} mines in {available} free cells"
        )
    rng = rng or random
    mines: Set[int] = set()
    while len(mines) < mine_count:
        index = rng.randrange(total_cells)
        if index != exclude_index:
            mines.add(index)
    return mines


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper board grid.

    Owns the cells and knows how to place mines, count neighbors and
    flood-fill empty regions. Game rules (status, flag counting, timer)
    live in the engine.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._grid:
            self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.config.width)]
            for row in range(self.config.height)
        ]

    @classmethod
    def from_mines(
        cls, config: BoardConfig, mines: Iterable[Tuple[int, int]]
    ) -> "Board":
        """
        Build a board with mines at fixed positions.

        The number of positions must match ``config.num_mines``.
        """
        board = cls(config)
        positions = set(mines)
        if len(positions) != config.num_mines:
            raise ValueError(
                f"Expected {config.num_mines} mine positions, "
                f"got {len(positions)}"
            )
        for row, col in positions:
            board.cell(row, col).is_mine = True
        board._calculate_neighbor_mines()
        return board

    def place_mines(
        self,
        exclude: Tuple[int, int],
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Place mines randomly, keeping one cell mine-free.

        Args:
            exclude: (row, col) position to keep mine-free.
            rng: Optional random source for reproducible layouts.
        """
        exclude_index = exclude[0] * self.config.width + exclude[1]
        mines = generate_mines(
            self.config.total_cells, self.config.num_mines, exclude_index, rng
        )
        for cell in self.cells():
            cell.is_mine = False
            cell.is_wrong_flag = False
            cell.is_exploded = False
        for index in mines:
            row, col = divmod(index, self.config.width)
            self._grid[row][col].is_mine = True
        self._calculate_neighbor_mines()

    def _calculate_neighbor_mines(self) -> None:
        """Calculate neighbor mine counts for all non-mine cells."""
        for cell in self.cells():
            if cell.is_mine:
                cell.neighbor_mines = 0
            else:
                cell.neighbor_mines = self._count_neighbor_mines(
                    cell.row, cell.col
                )

    def _count_neighbor_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Neighbors are listed row by row from the top-left corner,
        skipping the center cell.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    # ========================================================================
    # Reveal Mechanics (Mid-level)
    # ========================================================================

    def flood_fill(self, row: int, col: int) -> int:
        """
        Reveal a safe cell and spread through empty regions.

        Zero cells expand to their neighbors; numbered cells are revealed
        but stop the expansion. Flagged cells are never revealed or
        expanded.

        Args:
            row: Row index of the seed cell.
            col: Column index of the seed cell.

        Returns:
            Number of cells newly revealed.
        """
        visited = np.zeros((self.config.height, self.config.width), dtype=bool)
        queue = deque([(row, col)])
        revealed = 0

        while queue:
            current_row, current_col = queue.popleft()
            if visited[current_row, current_col]:
                continue
            visited[current_row, current_col] = True

            cell = self._grid[current_row][current_col]
            if cell.is_flagged:
                continue
            if cell.reveal():
                revealed += 1

            if cell.neighbor_mines == 0:
                for neighbor_row, neighbor_col in self.get_neighbors(
                    current_row, current_col
                ):
                    neighbor = self._grid[neighbor_row][neighbor_col]
                    if not neighbor.is_revealed:
                        queue.append((neighbor_row, neighbor_col))

        return revealed

    def expose_mines(self, exploded: Tuple[int, int]) -> None:
        """
        Apply the end-of-game markers after a mine is hit.

        Marks the triggering mine as exploded, reveals every mine and
        marks every flagged non-mine as a wrong flag.
        """
        self.cell(*exploded).is_exploded = True
        for cell in self.cells():
            if cell.is_mine:
                cell.is_revealed = True
            elif cell.is_flagged:
                cell.is_wrong_flag = True

    # ========================================================================
    # Accessors (High-level)
    # ========================================================================

    def cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexError: If the position is outside the board.
        """
        if not self.is_valid_position(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the "
                f"{self.config.height}x{self.config.width} board"
            )
        return self._grid[row][col]

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for grid_row in self._grid:
            yield from grid_row

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells."""
        return sum(1 for cell in self.cells() if cell.is_revealed)

    @property
    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self.cells() if cell.is_flagged)

    @property
    def placed_mines(self) -> int:
        """Number of cells holding a mine."""
        return sum(1 for cell in self.cells() if cell.is_mine)

    def copy(self) -> "Board":
        """Return a deep copy that shares no cells with this board."""
        grid = [[cell.copy() for cell in grid_row] for grid_row in self._grid]
        return Board(self.config, grid)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for an agent.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with neighbor count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (row, col) positions neither revealed nor flagged.
        """
        return [(cell.row, cell.col) for cell in self.cells() if cell.is_hidden]
