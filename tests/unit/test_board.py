"""Tests for knightsprint.models.board."""

import pytest

from knightsprint.models.board import (
    EMPTY,
    KNIGHT_OFFSETS,
    OBSTACLE,
    in_bounds,
    is_knight_move,
    is_occupied,
    legal_moves,
    make_grid,
    mobility,
    occupied_count,
    owner_marker,
    owner_of,
    temporarily_occupied,
)

# =============================================================================
# Markers
# =============================================================================


class TestMarkers:
    def test_owner_round_trip(self):
        for pid in range(4):
            assert owner_of(owner_marker(pid)) == pid

    def test_empty_and_obstacle_have_no_owner(self):
        assert owner_of(EMPTY) is None
        assert owner_of(OBSTACLE) is None

    def test_occupancy(self):
        assert not is_occupied(EMPTY)
        assert is_occupied(OBSTACLE)
        assert is_occupied(owner_marker(0))


# =============================================================================
# Legality
# =============================================================================


class TestLegalMoves:
    """Tests for knight move generation."""

    def test_offsets_order(self):
        assert KNIGHT_OFFSETS == (
            (-2, -1), (-2, 1), (-1, -2), (-1, 2),
            (1, -2), (1, 2), (2, -1), (2, 1),
        )

    def test_center_has_eight_moves(self):
        grid = make_grid(8)
        assert mobility(4, 4, 8, grid) == 8

    def test_corner_moves(self):
        grid = make_grid(8)
        assert legal_moves(0, 0, 8, grid) == [(1, 2), (2, 1)]

    def test_moves_follow_offset_order(self):
        grid = make_grid(8)
        grid[1][1] = owner_marker(0)
        assert legal_moves(1, 1, 8, grid) == [(0, 3), (2, 3), (3, 0), (3, 2)]

    def test_occupied_cells_excluded(self):
        grid = make_grid(8)
        grid[2][3] = OBSTACLE
        grid[3][2] = owner_marker(1)
        assert legal_moves(1, 1, 8, grid) == [(0, 3), (3, 0)]

    def test_three_by_three_center_is_isolated(self):
        grid = make_grid(3)
        assert legal_moves(1, 1, 3, grid) == []

    @pytest.mark.parametrize(
        "source,dest,expected",
        [
            ((1, 1), (3, 2), True),
            ((1, 1), (0, 3), True),
            ((1, 1), (1, 2), False),
            ((1, 1), (3, 3), False),
            ((1, 1), (1, 1), False),
        ],
    )
    def test_is_knight_move(self, source, dest, expected):
        assert is_knight_move(source, dest) is expected

    def test_in_bounds(self):
        assert in_bounds(0, 0, 3)
        assert in_bounds(2, 2, 3)
        assert not in_bounds(3, 0, 3)
        assert not in_bounds(0, -1, 3)

    def test_occupied_count(self):
        grid = make_grid(4)
        grid[0][0] = owner_marker(0)
        grid[1][2] = OBSTACLE
        assert occupied_count(grid) == 2


# =============================================================================
# Simulated occupancy
# =============================================================================


class TestTemporarilyOccupied:
    def test_marks_inside_block(self):
        grid = make_grid(5)
        with temporarily_occupied(grid, 2, 2, owner_marker(1)):
            assert grid[2][2] == owner_marker(1)
        assert grid[2][2] == EMPTY

    def test_restores_on_exception(self):
        grid = make_grid(5)
        with pytest.raises(RuntimeError):
            with temporarily_occupied(grid, 1, 3, owner_marker(0)):
                raise RuntimeError("boom")
        assert grid[1][3] == EMPTY

    def test_restores_previous_marker(self):
        grid = make_grid(5)
        grid[0][0] = OBSTACLE
        with temporarily_occupied(grid, 0, 0, owner_marker(2)):
            pass
        assert grid[0][0] == OBSTACLE

    def test_restores_on_early_return(self):
        grid = make_grid(5)

        def probe():
            with temporarily_occupied(grid, 4, 4, owner_marker(0)):
                return mobility(2, 3, 5, grid)

        assert probe() == 5
        assert grid[4][4] == EMPTY
