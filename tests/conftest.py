"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Board,
    BoardConfig,
    Cell,
    Game,
    GameState,
    GameStatus,
    MemorySettingsStore,
    new_game,
)


# ============================================================================
# State Builders
# ============================================================================

def build_state(
    width: int,
    height: int,
    mines: Iterable[Tuple[int, int]],
) -> GameState:
    """Create a game in progress with mines at fixed positions."""
    positions = list(mines)
    config = BoardConfig(width, height, len(positions))
    return GameState(
        board=Board.from_mines(config, positions),
        status=GameStatus.PLAYING,
        is_first_click=False,
    )


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Factory for in-progress games with a fixed mine layout."""
    return build_state


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 8x8 board with 10 mines."""
    return Board()


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


# ============================================================================
# Game State Fixtures
# ============================================================================

@pytest.fixture
def waiting_state() -> GameState:
    """Fresh beginner game before the first click."""
    return new_game()


@pytest.fixture
def corner_mine_state() -> GameState:
    """5x5 game with a single mine in the bottom-right corner."""
    return build_state(5, 5, [(4, 4)])


@pytest.fixture
def center_one_state() -> GameState:
    """
    8x8 game where the center cell (3, 3) shows a 1.

    The mine at (2, 2) is flagged and the center is already revealed.
    Three more mines wall off the safe corner (7, 7) so opening the
    rest of the board does not win the game.
    """
    state = build_state(8, 8, [(2, 2), (6, 6), (6, 7), (7, 6)])
    state.board.cell(3, 3).is_revealed = True
    state.board.cell(2, 2).is_flagged = True
    state.flag_count = 1
    return state


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine layouts."""
    return random.Random(1234)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def store() -> MemorySettingsStore:
    """Empty in-memory settings store."""
    return MemorySettingsStore()


@pytest.fixture
def game(store: MemorySettingsStore, rng: random.Random) -> Game:
    """Game on the default tier with a seeded random source."""
    return Game(store, rng=rng)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
