"""
Unit tests for Board class.

Tests configuration validation, mine placement, neighbor counting,
flood fill and observation generation.
"""
import random

import numpy as np
import pytest
from minesweeper import (
    Board,
    BoardConfig,
    InvalidSettingsError,
    UnknownDifficultyError,
    generate_mines,
    get_preset,
    preset_name,
)


def count_neighbor_mines(board: Board, row: int, col: int) -> int:
    return sum(
        1 for r in range(row - 1, row + 2) for c in range(col - 1, col + 2)
        if (r, c) != (row, col)
        and board.is_valid_position(r, c)
        and board.cell(r, c).is_mine
    )


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_zero_width_raises_error(self) -> None:
        """Width of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(0, 9, 10)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_too_many_mines_raises_error(self) -> None:
        """Too many mines should raise ValueError."""
        with pytest.raises(ValueError, match="Too many mines"):
            BoardConfig(3, 3, 9)

    def test_presets(self) -> None:
        assert get_preset("beginner") == BoardConfig(8, 8, 10)
        assert get_preset("Intermediate") == BoardConfig(16, 16, 40)
        assert get_preset("EXPERT") == BoardConfig(32, 16, 100)

    def test_unknown_preset_raises_key_error(self) -> None:
        with pytest.raises(UnknownDifficultyError):
            get_preset("nightmare")
        with pytest.raises(KeyError):
            get_preset("nightmare")


class TestCustomConfig:
    """Test clamping of player-typed board sizes."""

    def test_values_in_range_are_kept(self) -> None:
        config = BoardConfig.clamp_custom(10, 10, 33)
        assert (config.width, config.height, config.num_mines) == (10, 10, 33)

    @pytest.mark.parametrize(
        "requested,expected",
        [
            ((7, 10, 5), (8, 10, 5)),
            ((10, 101, 5), (10, 100, 5)),
            ((10, 10, 0), (10, 10, 1)),
            ((10, 10, 40), (10, 10, 33)),
            ((200, 200, 5000), (100, 100, 3333)),
        ],
    )
    def test_out_of_range_values_are_clamped(self, requested, expected) -> None:
        config = BoardConfig.clamp_custom(*requested)
        assert (config.width, config.height, config.num_mines) == expected

    def test_mine_cap_follows_clamped_size(self) -> None:
        config = BoardConfig.clamp_custom(3, 3, 50)
        assert (config.width, config.height, config.num_mines) == (8, 8, 21)

    def test_invalid_config_is_invalid_settings_error(self) -> None:
        with pytest.raises(InvalidSettingsError):
            BoardConfig(5, 5, 25)

    def test_preset_name(self) -> None:
        assert preset_name(BoardConfig(16, 16, 40)) == "INTERMEDIATE"
        assert preset_name(BoardConfig(16, 16, 41)) is None


# ============================================================================
# Mine Generation Tests
# ============================================================================

class TestGenerateMines:
    """Test rejection-sampled mine placement."""

    def test_excluded_index_never_chosen(self) -> None:
        rng = random.Random(7)
        for _ in range(200):
            mines = generate_mines(64, 21, exclude_index=27, rng=rng)
            assert 27 not in mines
            assert len(mines) == 21

    def test_fills_every_free_cell(self) -> None:
        mines = generate_mines(9, 8, exclude_index=4, rng=random.Random(0))
        assert mines == {0, 1, 2, 3, 5, 6, 7, 8}

    def test_too_many_mines_raises(self) -> None:
        with pytest.raises(ValueError):
            generate_mines(9, 9, exclude_index=0)

    def test_indices_within_board(self) -> None:
        mines = generate_mines(100, 30, rng=random.Random(3))
        assert all(0 <= index < 100 for index in mines)


# ============================================================================
# Mine Placement Tests
# ============================================================================

class TestPlaceMines:
    """Test placing mines on the grid."""

    def test_new_board_has_no_mines(self, default_board: Board) -> None:
        """Mines are only placed on demand."""
        assert default_board.placed_mines == 0

    def test_places_exact_count(self, default_board: Board, rng) -> None:
        default_board.place_mines((3, 3), rng)
        assert default_board.placed_mines == 10

    def test_excluded_cell_is_safe(self, rng) -> None:
        for _ in range(50):
            board = Board(BoardConfig(8, 8, 21))
            board.place_mines((0, 7), rng)
            assert board.cell(0, 7).is_mine is False

    def test_neighbor_counts_match(self, rng) -> None:
        board = Board(BoardConfig(16, 16, 40))
        board.place_mines((5, 5), rng)
        for cell in board.cells():
            if not cell.is_mine:
                expected = count_neighbor_mines(board, cell.row, cell.col)
                assert cell.neighbor_mines == expected

    def test_placement_clears_end_markers(self, default_board: Board, rng) -> None:
        cell = default_board.cell(0, 0)
        cell.is_wrong_flag = True
        cell.is_exploded = True
        default_board.place_mines((4, 4), rng)
        assert cell.is_wrong_flag is False
        assert cell.is_exploded is False

    def test_from_mines_sets_layout(self) -> None:
        board = Board.from_mines(BoardConfig(3, 3, 1), [(1, 1)])
        assert board.cell(1, 1).is_mine is True
        for cell in board.cells():
            if not cell.is_mine:
                assert cell.neighbor_mines == 1

    def test_from_mines_rejects_wrong_count(self) -> None:
        with pytest.raises(ValueError):
            Board.from_mines(BoardConfig(3, 3, 2), [(0, 0)])


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test neighbor enumeration."""

    def test_corner_has_three_neighbors(self, default_board: Board) -> None:
        assert len(default_board.get_neighbors(0, 0)) == 3

    def test_edge_has_five_neighbors(self, default_board: Board) -> None:
        assert len(default_board.get_neighbors(0, 4)) == 5

    def test_center_has_eight_neighbors(self, default_board: Board) -> None:
        assert default_board.get_neighbors(1, 1) == [
            (0, 0), (0, 1), (0, 2),
            (1, 0), (1, 2),
            (2, 0), (2, 1), (2, 2),
        ]


# ============================================================================
# Flood Fill Tests
# ============================================================================

class TestFloodFill:
    """Test breadth-first reveal of empty regions."""

    def test_empty_board_reveals_everything(self, empty_board: Board) -> None:
        assert empty_board.flood_fill(2, 2) == 25
        assert all(cell.is_revealed for cell in empty_board.cells())

    def test_numbered_seed_reveals_only_itself(self) -> None:
        board = Board.from_mines(BoardConfig(3, 3, 1), [(0, 0)])
        assert board.flood_fill(1, 1) == 1
        assert board.revealed_count == 1

    def test_fill_stops_at_numbered_border(self) -> None:
        # Column of mines splits the board into two halves.
        mines = [(row, 2) for row in range(5)]
        board = Board.from_mines(BoardConfig(6, 5, 5), mines)
        board.flood_fill(0, 0)
        for cell in board.cells():
            assert cell.is_revealed == (cell.col < 2)

    def test_flagged_cells_are_skipped(self, empty_board: Board) -> None:
        empty_board.cell(2, 3).toggle_flag()
        revealed = empty_board.flood_fill(0, 0)
        assert revealed == 24
        assert empty_board.cell(2, 3).is_revealed is False

    def test_flag_does_not_block_other_paths(self, empty_board: Board) -> None:
        for col in range(5):
            if col != 2:
                empty_board.cell(2, col).toggle_flag()
        empty_board.flood_fill(0, 0)
        assert empty_board.cell(4, 4).is_revealed is True


# ============================================================================
# Accessor Tests
# ============================================================================

class TestAccessors:
    """Test cell lookup, copying and observations."""

    def test_cell_out_of_bounds_raises(self, default_board: Board) -> None:
        with pytest.raises(IndexError):
            default_board.cell(8, 0)
        with pytest.raises(IndexError):
            default_board.cell(0, -1)

    def test_get_cell_out_of_bounds_returns_none(
        self, default_board: Board
    ) -> None:
        assert default_board.get_cell(-1, 0) is None

    def test_copy_shares_no_cells(self, default_board: Board) -> None:
        clone = default_board.copy()
        clone.cell(0, 0).reveal()
        assert default_board.cell(0, 0).is_revealed is False
        assert clone.config == default_board.config

    def test_observation_shape_and_dtype(self) -> None:
        board = Board(BoardConfig(10, 4, 3))
        obs = board.get_observation()
        assert obs.shape == (4, 10)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)

    def test_valid_actions_skip_flags(self, default_board: Board) -> None:
        default_board.cell(0, 0).toggle_flag()
        actions = default_board.get_valid_actions()
        assert (0, 0) not in actions
        assert len(actions) == 63
