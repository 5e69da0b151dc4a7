"""Tests for knightsprint.engine.setup.

Tests cover:
- Start squares and board sizing
- Roster construction and CPU strategy assignment
- Seeded obstacle placement and its forbidden zone
- Configuration validation
"""

import logging

import pytest
from pydantic import ValidationError

from knightsprint.engine.setup import (
    build_roster,
    create_game,
    default_strategy_for,
    init_state,
    place_obstacles,
    resolve_seed,
    start_positions,
)
from knightsprint.models.board import (
    EMPTY,
    OBSTACLE,
    knight_neighbours,
    owner_marker,
)
from knightsprint.models.config import GameConfig
from knightsprint.models.rng import make_generator
from knightsprint.models.state import Phase, PlayerStatus
from knightsprint.parameters import SEED_UPPER_BOUND

# =============================================================================
# Initial state
# =============================================================================


class TestInitState:
    """Tests for the initial GameState."""

    def test_two_player_default_board(self, two_player_state):
        state = two_player_state
        assert state.board_size == 8
        assert state.seed == 42
        assert state.turn == 0
        assert state.phase == Phase.SELECT
        assert [p.position for p in state.players] == [(1, 1), (6, 6)]
        assert state.grid[1][1] == owner_marker(0)
        assert state.grid[6][6] == owner_marker(1)
        assert all(p.score == 1 for p in state.players)
        assert all(p.status == PlayerStatus.ALIVE for p in state.players)
        assert state.pending_intents == {}
        assert state.history == []

    def test_only_start_squares_occupied_without_obstacles(self, two_player_state):
        occupied = {
            (r, c)
            for r, row in enumerate(two_player_state.grid)
            for c, marker in enumerate(row)
            if marker != EMPTY
        }
        assert occupied == {(1, 1), (6, 6)}

    def test_ruleset_carries_config(self):
        state = create_game(seed=5, timer_seconds=7, obstacle_count=2)
        assert state.ruleset.timer_seconds == 7
        assert state.ruleset.obstacle_count == 2
        assert state.ruleset.fog_of_war is False
        assert state.ruleset.shrink_board is False

    def test_same_seed_same_state(self):
        a = create_game(board_size=10, seed=99, player_count=4, cpu_count=4, obstacle_count=8)
        b = create_game(board_size=10, seed=99, player_count=4, cpu_count=4, obstacle_count=8)
        assert a.grid == b.grid
        assert a.obstacles == b.obstacles
        assert a.players == b.players

    def test_missing_seed_is_picked_and_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="knightsprint.engine.setup"):
            state = create_game(seed=None)
        assert 0 <= state.seed < SEED_UPPER_BOUND
        assert str(state.seed) in caplog.text

    def test_resolve_seed_keeps_given_seed(self):
        assert resolve_seed(0) == 0
        assert resolve_seed(123) == 123


class TestStartPositions:
    @pytest.mark.parametrize(
        "size,expected",
        [
            (8, [(1, 1), (6, 6), (1, 6), (6, 1)]),
            (10, [(2, 2), (7, 7), (2, 7), (7, 2)]),
            (4, [(0, 0), (3, 3), (0, 3), (3, 0)]),
            (3, [(0, 0), (2, 2), (0, 2), (2, 0)]),
        ],
    )
    def test_corner_order(self, size, expected):
        assert start_positions(4, size) == expected

    def test_truncated_to_player_count(self):
        assert start_positions(2, 8) == [(1, 1), (6, 6)]


# =============================================================================
# Roster
# =============================================================================


class TestRoster:
    """Tests for seat assignment and CPU strategies."""

    def test_humans_take_first_seats(self):
        config = GameConfig(seed=1, player_count=3, cpu_count=2)
        players = build_roster(config, start_positions(3, 8))
        assert [p.is_human for p in players] == [True, False, False]
        assert players[0].ai_strategy is None

    def test_default_alternation(self):
        state = create_game(seed=1, player_count=4, cpu_count=4)
        assert [p.ai_strategy for p in state.players] == [
            "aggressor", "mobility", "aggressor", "mobility",
        ]

    def test_configured_strategy_alternates_with_mobility(self):
        state = create_game(seed=1, player_count=4, cpu_count=4, ai_strategy="balanced")
        assert [p.ai_strategy for p in state.players] == [
            "balanced", "mobility", "balanced", "mobility",
        ]

    def test_configured_mobility_alternates_with_aggressor(self):
        assert default_strategy_for(0, "mobility") == "mobility"
        assert default_strategy_for(1, "mobility") == "aggressor"

    def test_per_player_override_wins(self):
        state = create_game(
            seed=1,
            player_count=3,
            cpu_count=2,
            player_strategies={1: "balanced"},
        )
        assert state.players[1].ai_strategy == "balanced"
        assert state.players[2].ai_strategy == "aggressor"

    def test_all_cpu_game_allowed(self):
        state = create_game(seed=1, player_count=2, cpu_count=2)
        assert not any(p.is_human for p in state.players)


# =============================================================================
# Obstacles
# =============================================================================


class TestObstacles:
    """Tests for seeded obstacle placement."""

    def test_obstacles_avoid_starts_and_their_knight_moves(self):
        state = create_game(board_size=10, seed=7, player_count=4, cpu_count=4, obstacle_count=12)
        forbidden = set()
        for p in state.players:
            forbidden.add(p.position)
            forbidden.update(knight_neighbours(p.row, p.col))
        assert len(state.obstacles) == 12
        assert not forbidden & set(state.obstacles)
        for r, c in state.obstacles:
            assert state.grid[r][c] == OBSTACLE

    def test_obstacles_are_distinct(self):
        state = create_game(board_size=8, seed=3, obstacle_count=20)
        assert len(set(state.obstacles)) == len(state.obstacles)

    def test_placement_is_deterministic(self):
        starts = start_positions(2, 8)
        a = place_obstacles(8, make_generator(11), starts, 6)
        b = place_obstacles(8, make_generator(11), starts, 6)
        assert a == b

    def test_each_attempt_draws_row_then_column(self):
        starts = start_positions(2, 8)
        rng = make_generator(11)
        twin = make_generator(11)
        obstacles = place_obstacles(8, rng, starts, 1)
        expected = None
        while expected is None:
            r, c = twin.randbelow(8), twin.randbelow(8)
            if (r, c) not in {(1, 1), (6, 6)} | set(knight_neighbours(1, 1)) | set(knight_neighbours(6, 6)):
                expected = (r, c)
        assert obstacles == [expected]
        assert rng.draws == twin.draws

    def test_three_by_three_free_cells(self):
        state = create_game(board_size=3, seed=42, obstacle_count=3)
        assert set(state.obstacles) == {(0, 2), (2, 0), (1, 1)}

    def test_shortfall_is_accepted_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="knightsprint.engine.setup"):
            state = create_game(board_size=3, seed=42, obstacle_count=5)
        assert len(state.obstacles) == 3
        assert "Placed 3 of 5 obstacles" in caplog.text

    def test_zero_obstacles_draws_nothing(self):
        state = create_game(seed=42, obstacle_count=0)
        assert state.obstacles == []
        assert state.rng.draws == 0


# =============================================================================
# Validation
# =============================================================================


class TestConfigValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"board_size": 2},
            {"player_count": 1},
            {"player_count": 5},
            {"player_count": 2, "cpu_count": 3},
            {"cpu_count": -1},
            {"obstacle_count": -1},
            {"timer_seconds": -1},
        ],
    )
    def test_invalid_options_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            GameConfig(**kwargs)

    def test_human_count(self):
        assert GameConfig(player_count=4, cpu_count=1).human_count == 3

    def test_init_state_accepts_config(self):
        state = init_state(GameConfig(board_size=5, seed=8, player_count=2, cpu_count=0))
        assert state.board_size == 5
        assert [p.position for p in state.players] == [(1, 1), (3, 3)]
