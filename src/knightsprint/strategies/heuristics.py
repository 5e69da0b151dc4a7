"""Built-in CPU strategies for KnightSprint.

All three strategies scan candidates in legal-move order and simulate each
candidate on the shared grid with ``temporarily_occupied``. Ties and noise
are drawn from ``state.rng`` so choices are fixed by the game seed.

Strategies:
- mobility: Warnsdorff-style, keep the most onward moves open
- aggressor: Take squares that cut opponents' moves, without self-crippling
- balanced: Blend of both, shifting toward blocking as the board fills
"""

from __future__ import annotations

from knightsprint.models.board import (
    Cell,
    mobility,
    occupied_count,
    owner_marker,
    temporarily_occupied,
)
from knightsprint.models.state import GameState, PlayerState
from knightsprint.parameters import (
    AGGRESSOR_REDUCTION_WEIGHT,
    BALANCED_AGGRESS_SLOPE,
    BALANCED_MOBILITY_SLOPE,
    BALANCED_NOISE_SCALE,
    MAX_KNIGHT_MOBILITY,
    TIE_BREAK_THRESHOLD,
)
from knightsprint.strategies.registry import StrategyName, StrategyRegistry


def opponent_reduction(state: GameState, player: PlayerState) -> int:
    """Sum of (8 - mobility) over living opponents under the current grid."""
    total = 0
    for opp in state.opponents_of(player.id):
        total += MAX_KNIGHT_MOBILITY - mobility(opp.row, opp.col, state.board_size, state.grid)
    return total


def mobility_strategy(state: GameState, player: PlayerState, moves: list[Cell]) -> Cell:
    """Prefer the square with the most onward moves.

    An exact tie costs one draw and replaces the current best when the draw
    exceeds 0.5.
    """
    best = None
    best_score = -1
    marker = owner_marker(player.id)

    for r, c in moves:
        with temporarily_occupied(state.grid, r, c, marker):
            score = mobility(r, c, state.board_size, state.grid)
        if score > best_score:
            best_score = score
            best = (r, c)
        elif score == best_score and state.rng() > TIE_BREAK_THRESHOLD:
            best = (r, c)

    return best or moves[0]


def aggressor_strategy(state: GameState, player: PlayerState, moves: list[Cell]) -> Cell:
    """Prefer squares that reduce opponents' mobility the most.

    Score per candidate: 2 * sum(8 - opponent mobility) + own mobility.
    Falls back to mobility when no opponent is alive.
    """
    if not state.opponents_of(player.id):
        return mobility_strategy(state, player, moves)

    best = None
    best_score = float("-inf")
    marker = owner_marker(player.id)

    for r, c in moves:
        with temporarily_occupied(state.grid, r, c, marker):
            reduction = opponent_reduction(state, player)
            own = mobility(r, c, state.board_size, state.grid)
        combined = AGGRESSOR_REDUCTION_WEIGHT * reduction + own

        if combined > best_score or (
            combined == best_score and state.rng() > TIE_BREAK_THRESHOLD
        ):
            best_score = combined
            best = (r, c)

    return best or moves[0]


def balanced_strategy(state: GameState, player: PlayerState, moves: list[Cell]) -> Cell:
    """Blend mobility and blocking, weighted by board density.

    Early game (empty board) favours mobility; as the board fills the
    blocking weight grows. Each candidate gets 0..0.2 of seeded noise, which
    makes exact ties practically impossible, so the strictly greatest wins.
    """
    density = occupied_count(state.grid) / state.total_cells
    aggress_weight = BALANCED_AGGRESS_SLOPE * density
    mobility_weight = 1 - BALANCED_MOBILITY_SLOPE * density

    best = None
    best_score = float("-inf")
    marker = owner_marker(player.id)

    for r, c in moves:
        with temporarily_occupied(state.grid, r, c, marker):
            own = mobility(r, c, state.board_size, state.grid)
            aggress = opponent_reduction(state, player)
            score = (
                mobility_weight * own
                + aggress_weight * aggress
                + state.rng() * BALANCED_NOISE_SCALE
            )
        if score > best_score:
            best_score = score
            best = (r, c)

    return best or moves[0]


BUILTIN_STRATEGIES = {
    StrategyName.MOBILITY: mobility_strategy,
    StrategyName.AGGRESSOR: aggressor_strategy,
    StrategyName.BALANCED: balanced_strategy,
}


def register_builtin_strategies(registry: StrategyRegistry) -> None:
    """Register mobility, aggressor and balanced, in that order."""
    for name, fn in BUILTIN_STRATEGIES.items():
        registry.register(name, fn)
