"""Shared pytest fixtures and markers for all tests."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def set_cells(state, cells, marker):
    """Return a copy of state with the given cells set to marker."""
    from knightsprint.models.board import copy_grid

    grid = copy_grid(state.grid)
    for r, c in cells:
        grid[r][c] = marker
    return state.model_copy(update={"grid": grid})


def replace_player(state, player_id, **changes):
    """Return a copy of state with one player's fields changed."""
    players = [
        p.model_copy(update=changes) if p.id == player_id else p
        for p in state.players
    ]
    return state.model_copy(update={"players": players})


@pytest.fixture
def registry():
    """Provide a registry with the built-in strategies."""
    from knightsprint.strategies import create_default_registry
    return create_default_registry()


@pytest.fixture
def two_player_state():
    """8x8, seed 42, two humans: starts (1,1) and (6,6)."""
    from knightsprint.engine.setup import create_game
    return create_game(board_size=8, seed=42, player_count=2, cpu_count=0, obstacle_count=0)


@pytest.fixture
def tiny_two_player_state():
    """3x3, two humans: starts (0,0) and (2,2)."""
    from knightsprint.engine.setup import create_game
    return create_game(board_size=3, seed=1, player_count=2, cpu_count=0)


@pytest.fixture
def tiny_four_player_state():
    """3x3, four humans on the four corners."""
    from knightsprint.engine.setup import create_game
    return create_game(board_size=3, seed=1, player_count=4, cpu_count=0)


@pytest.fixture
def with_cells():
    """Provide set_cells for tests that hand-build board positions."""
    return set_cells


@pytest.fixture
def with_player():
    """Provide replace_player for tests that hand-build player states."""
    return replace_player
