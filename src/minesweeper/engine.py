"""
Game state transitions for Minesweeper.

Every transition takes the current ``GameState`` and returns the next one.
The input state is never modified: a transition that changes the board
works on a copy, and a transition whose preconditions fail returns the
very same state object. States may share a board that neither of them
will ever mutate again.
"""
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .board import (
    CUSTOM_LEVEL,
    DEFAULT_DIFFICULTY,
    Board,
    BoardConfig,
    get_preset,
)


# ============================================================================
# Constants
# ============================================================================

MAX_TIMER = 999


class GameStatus(Enum):
    """Possible states of the game."""

    WAITING = "waiting"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


# ============================================================================
# Game State
# ============================================================================

@dataclass
class GameState:
    """
    Complete state of one game.

    Attributes:
        board: Cell grid for this game.
        status: Where the game is in its lifecycle.
        flag_count: Number of currently flagged cells.
        timer: Elapsed seconds, saturating at 999.
        is_first_click: True until the first reveal places the mines.
        difficulty_level: Preset name or "CUSTOM".
    """

    board: Board
    status: GameStatus = GameStatus.WAITING
    flag_count: int = 0
    timer: int = 0
    is_first_click: bool = True
    difficulty_level: str = DEFAULT_DIFFICULTY

    @property
    def mine_count(self) -> int:
        return self.board.config.num_mines

    @property
    def board_width(self) -> int:
        return self.board.config.width

    @property
    def board_height(self) -> int:
        return self.board.config.height

    @property
    def remaining_mines(self) -> int:
        """Mines minus flags; negative when the player over-flags."""
        return self.mine_count - self.flag_count

    @property
    def is_over(self) -> bool:
        return self.status in (GameStatus.WON, GameStatus.LOST)


def new_game(
    config: Optional[BoardConfig] = None,
    difficulty_level: str = DEFAULT_DIFFICULTY,
) -> GameState:
    """Create a waiting game with an empty board."""
    config = config or get_preset(DEFAULT_DIFFICULTY)
    return GameState(board=Board(config), difficulty_level=difficulty_level)


def _fork(state: GameState) -> GameState:
    """Copy a state so its board can be modified without touching the input."""
    return replace(state, board=state.board.copy())


def _lose(state: GameState, exploded: Tuple[int, int]) -> None:
    state.status = GameStatus.LOST
    state.board.expose_mines(exploded)


def _check_win(state: GameState) -> None:
    if state.status != GameStatus.PLAYING:
        return
    safe_cells = state.board.config.total_cells - state.mine_count
    if state.board.revealed_count == safe_cells:
        state.status = GameStatus.WON


# ============================================================================
# Transitions
# ============================================================================

def init_game(state: GameState) -> GameState:
    """Start over with the current dimensions and mine count."""
    return new_game(state.board.config, state.difficulty_level)


def reveal_cell(
    state: GameState,
    row: int,
    col: int,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Reveal a cell.

    The first reveal of a game places the mines around the clicked cell
    and starts play. Revealing a mine loses the game; otherwise the empty
    region around the cell is flood-filled and the win condition checked.

    Args:
        state: Current game state.
        row: Row index to reveal.
        col: Column index to reveal.
        rng: Random source used for mine placement on the first reveal.

    Returns:
        The next state, or ``state`` itself if the reveal is not allowed.

    Raises:
        IndexError: If the position is outside the board.
    """
    cell = state.board.cell(row, col)
    if cell.is_revealed or cell.is_flagged or state.is_over:
        return state

    next_state = _fork(state)
    if next_state.is_first_click:
        next_state.board.place_mines((row, col), rng)
        next_state.is_first_click = False
        next_state.status = GameStatus.PLAYING

    if next_state.board.cell(row, col).is_mine:
        _lose(next_state, (row, col))
    else:
        next_state.board.flood_fill(row, col)
        _check_win(next_state)
    return next_state


def toggle_flag(state: GameState, row: int, col: int) -> GameState:
    """
    Flag or unflag a cell that has not been revealed.

    The flag count is not capped at the mine count.

    Raises:
        IndexError: If the position is outside the board.
    """
    cell = state.board.cell(row, col)
    if cell.is_revealed or state.is_over:
        return state

    next_state = _fork(state)
    target = next_state.board.cell(row, col)
    target.toggle_flag()
    next_state.flag_count += 1 if target.is_flagged else -1
    return next_state


def area_open(state: GameState, row: int, col: int) -> GameState:
    """
    Chord: open every unflagged neighbor of a satisfied numbered cell.

    Only acts when the number of flagged neighbors equals the cell's
    count and at least one neighbor is still closed. A mine among the
    opened neighbors (a misplaced flag) loses the game.

    Raises:
        IndexError: If the position is outside the board.
    """
    cell = state.board.cell(row, col)
    if (
        not cell.is_revealed
        or cell.is_mine
        or cell.neighbor_mines == 0
        or state.is_over
    ):
        return state

    flagged = []
    candidates = []
    for neighbor_row, neighbor_col in state.board.get_neighbors(row, col):
        neighbor = state.board.cell(neighbor_row, neighbor_col)
        if neighbor.is_flagged:
            flagged.append((neighbor_row, neighbor_col))
        elif not neighbor.is_revealed:
            candidates.append((neighbor_row, neighbor_col))

    if len(flagged) != cell.neighbor_mines or not candidates:
        return state

    next_state = _fork(state)
    for position in candidates:
        if next_state.board.cell(*position).is_mine:
            _lose(next_state, position)
            return next_state

    for candidate_row, candidate_col in candidates:
        next_state.board.flood_fill(candidate_row, candidate_col)
    _check_win(next_state)
    return next_state


def tick_timer(state: GameState) -> GameState:
    """Advance the timer by one second while playing, up to 999."""
    if state.status != GameStatus.PLAYING or state.timer >= MAX_TIMER:
        return state
    return replace(state, timer=state.timer + 1)


def set_difficulty(state: GameState, tier: str) -> GameState:
    """
    Start a new game on a preset tier.

    Raises:
        UnknownDifficultyError: If the tier is not a known preset.
    """
    return new_game(get_preset(tier), tier.upper())


def set_custom_difficulty(
    state: GameState, width: int, height: int, mines: int
) -> GameState:
    """
    Start a new game on a custom-sized board.

    Any size the board can hold is accepted; the [8, 100] size range and
    the one-third mine cap are applied by input forms through
    ``BoardConfig.clamp_custom`` before calling this.

    Raises:
        InvalidSettingsError: If the values cannot describe a board.
    """
    return new_game(BoardConfig(width, height, mines), CUSTOM_LEVEL)
