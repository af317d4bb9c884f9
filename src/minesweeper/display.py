"""
Plain-text rendering of a game for terminals and ``ansi`` render mode.
"""
from typing import List

from .cell import Cell
from .engine import GameState, GameStatus


STATUS_FACES = {
    GameStatus.WAITING: ":)",
    GameStatus.PLAYING: ":)",
    GameStatus.WON: "B)",
    GameStatus.LOST: "X(",
}


def format_counter(value: int) -> str:
    """
    Format a number for a three-digit counter display.

    Only the last three digits are shown; negative values keep their
    sign in the first position (e.g. ``-03``).
    """
    if value < 0:
        return "-" + str(-value % 100).zfill(2)
    return str(value % 1000).zfill(3)


def status_face(status: GameStatus) -> str:
    return STATUS_FACES[status]


def format_elapsed(seconds: int) -> str:
    """Format a play time as ``"2m 5s"`` or ``"45s"``."""
    minutes, remaining = divmod(seconds, 60)
    if minutes > 0:
        return f"{minutes}m {remaining}s"
    return f"{remaining}s"


def cell_symbol(cell: Cell) -> str:
    """Single character shown for a cell."""
    if cell.is_revealed:
        if cell.is_exploded:
            return "#"
        if cell.is_mine:
            return "*"
        if cell.neighbor_mines == 0:
            return " "
        return str(cell.neighbor_mines)
    if cell.is_flagged:
        return "x" if cell.is_wrong_flag else "F"
    return "."


def render_header(state: GameState) -> str:
    """Mine counter, status face and timer on one line."""
    return " | ".join([
        format_counter(state.remaining_mines),
        status_face(state.status),
        format_counter(state.timer),
    ])


def render_board(state: GameState, show_coordinates: bool = False) -> str:
    """
    Render the header and grid as text.

    Args:
        state: Game to render.
        show_coordinates: Prefix rows and columns with their indices.

    Returns:
        Multi-line string.
    """
    board = state.board
    width = state.board_width
    label_width = len(str(state.board_height - 1))
    lines: List[str] = [render_header(state)]

    if show_coordinates:
        columns = " ".join(str(col % 10) for col in range(width))
        lines.append(" " * (label_width + 1) + columns)

    for row in range(state.board_height):
        row_str = " ".join(
            cell_symbol(board.cell(row, col)) for col in range(width)
        )
        if show_coordinates:
            row_str = f"{row:>{label_width}} {row_str}"
        lines.append(row_str)

    return "\n".join(lines)
