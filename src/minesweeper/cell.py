"""
Cell module for Minesweeper game.

Represents individual cells on the game board: their content
(mine/number) and the flags the board engine sets on them while
a game is played and when it is lost.
"""
from enum import Enum, auto
from dataclasses import dataclass, replace


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index of the cell.
        col: Column index of the cell.
        is_mine: Whether this cell contains a mine.
        is_revealed: Whether the cell has been opened.
        is_flagged: Whether the player has flagged the cell.
        neighbor_mines: Count of mines in neighboring cells (0-8).
        is_wrong_flag: Flagged but not a mine, set when the game is lost.
        is_exploded: The mine that ended the game.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    neighbor_mines: int = 0
    is_wrong_flag: bool = False
    is_exploded: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.is_revealed or self.is_flagged:
            return False
        self.is_revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.is_revealed:
            return False
        self.is_flagged = not self.is_flagged
        return True

    def copy(self) -> "Cell":
        """Return an independent copy of this cell."""
        return replace(self)

    @property
    def state(self) -> CellState:
        """Visual state derived from the revealed/flagged flags."""
        if self.is_revealed:
            return CellState.REVEALED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return self.state == CellState.HIDDEN

    def to_observation(self) -> int:
        """
        Convert cell to observation value for an agent.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighboring mine count
            9: Revealed mine (game over state)
        """
        if self.is_revealed:
            return 9 if self.is_mine else self.neighbor_mines
        if self.is_flagged:
            return -2
        return -1
