"""Board representation and knight-move legality for KnightSprint.

The grid is a list of rows of integer cell markers:
- EMPTY (0): never visited, a legal destination
- OBSTACLE (-1): placed at initialization
- OWNER_BASE + player_id: visited (trail or current square) by that player

A cell leaves EMPTY exactly once and never returns to it.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

Cell = tuple[int, int]
Grid = list[list[int]]

EMPTY = 0
OBSTACLE = -1
OWNER_BASE = 10

# Enumeration order matters: it fixes tie-break and scan order everywhere.
KNIGHT_OFFSETS: tuple[Cell, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)


def owner_marker(player_id: int) -> int:
    """Grid marker for a cell visited by the given player."""
    return OWNER_BASE + player_id


def owner_of(marker: int) -> Optional[int]:
    """Player id owning a marker, or None for EMPTY and OBSTACLE."""
    if marker >= OWNER_BASE:
        return marker - OWNER_BASE
    return None


def is_occupied(marker: int) -> bool:
    """Whether a cell marker blocks movement (trail, occupant or obstacle)."""
    return marker != EMPTY


def make_grid(size: int) -> Grid:
    """Create a size x size grid with every cell EMPTY."""
    return [[EMPTY] * size for _ in range(size)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def in_bounds(row: int, col: int, size: int) -> bool:
    return 0 <= row < size and 0 <= col < size


def knight_neighbours(row: int, col: int) -> list[Cell]:
    """All eight knight destinations, ignoring bounds and occupancy."""
    return [(row + dr, col + dc) for dr, dc in KNIGHT_OFFSETS]


def is_knight_move(source: Cell, destination: Cell) -> bool:
    dr = destination[0] - source[0]
    dc = destination[1] - source[1]
    return (dr, dc) in KNIGHT_OFFSETS


def legal_moves(row: int, col: int, size: int, grid: Grid) -> list[Cell]:
    """Legal knight destinations from (row, col) under the current grid.

    A destination is legal iff it is on the board and EMPTY. Results follow
    KNIGHT_OFFSETS order.
    """
    moves = []
    for dr, dc in KNIGHT_OFFSETS:
        nr, nc = row + dr, col + dc
        if in_bounds(nr, nc, size) and grid[nr][nc] == EMPTY:
            moves.append((nr, nc))
    return moves


def mobility(row: int, col: int, size: int, grid: Grid) -> int:
    """Number of legal knight moves from (row, col)."""
    return len(legal_moves(row, col, size, grid))


def occupied_count(grid: Grid) -> int:
    """Number of cells that are not EMPTY."""
    return sum(1 for line in grid for marker in line if is_occupied(marker))


@contextmanager
def temporarily_occupied(grid: Grid, row: int, col: int, marker: int) -> Iterator[Grid]:
    """Mark a cell for the duration of a with-block, then restore it.

    Used by strategies to ask "what if I moved here" on the shared grid
    without cloning the board. The original value is restored on every exit
    path, including exceptions and early returns from inside the block.

    Example:
        with temporarily_occupied(state.grid, r, c, owner_marker(pid)):
            score = mobility(r, c, state.board_size, state.grid)
    """
    original = grid[row][col]
    grid[row][col] = marker
    try:
        yield grid
    finally:
        grid[row][col] = original
