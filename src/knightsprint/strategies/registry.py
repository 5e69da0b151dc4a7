"""Strategy registry for KnightSprint CPU players.

A strategy is a scoring function ``(state, player, legal_moves) -> move``.
Registries are explicit objects: build one with create_default_registry()
(or an empty StrategyRegistry for isolated tests) and pass it by reference
to whatever computes moves.

Strategy contract:
- Must not change the GameState or its grid beyond its own call. Simulated
  occupancy goes through ``temporarily_occupied`` so the grid is restored on
  every exit path.
- Must draw randomness only from ``state.rng``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from knightsprint.models.board import Cell, legal_moves
from knightsprint.models.state import GameState, PlayerState
from knightsprint.parameters import DEFAULT_STRATEGY

logger = logging.getLogger(__name__)

StrategyFn = Callable[[GameState, PlayerState, list[Cell]], Cell]


class StrategyName(str, Enum):
    """Built-in strategy identifiers."""

    MOBILITY = "mobility"
    AGGRESSOR = "aggressor"
    BALANCED = "balanced"


class StrategyRegistry:
    """Mapping from strategy name to scoring function.

    Attributes:
        default: Name used when a configured name is unknown
    """

    def __init__(self, default: str = DEFAULT_STRATEGY) -> None:
        self.default = default
        self._strategies: dict[str, StrategyFn] = {}

    def register(self, name: str | StrategyName, fn: StrategyFn) -> None:
        """Register a strategy. Re-registering a name overwrites it."""
        key = name.value if isinstance(name, StrategyName) else name
        if key in self._strategies:
            logger.debug(f"Overwriting strategy '{key}'")
        self._strategies[key] = fn

    def list_registered_names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._strategies)

    def get(self, name: str) -> Optional[StrategyFn]:
        return self._strategies.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._strategies

    def resolve_name(self, name: Optional[str]) -> str:
        """Name that will actually be used for a configured strategy name.

        Unknown or missing names fall back to the default with a warning.
        """
        if name is not None and name in self._strategies:
            return name
        logger.warning(f"Unknown strategy '{name}', falling back to '{self.default}'")
        return self.default

    def resolve_roster(self, state: GameState) -> GameState:
        """Resolve every CPU player's strategy name once, up front.

        Returns a new state whose CPU players carry only registered names.
        """
        players = []
        changed = False
        for player in state.players:
            if player.is_human:
                players.append(player)
                continue
            resolved = self.resolve_name(player.ai_strategy)
            if resolved != player.ai_strategy:
                player = player.model_copy(update={"ai_strategy": resolved})
                changed = True
            players.append(player)
        if not changed:
            return state
        return state.model_copy(update={"players": players})

    def compute_move(self, state: GameState, player_id: int) -> Optional[Cell]:
        """Choose a move for a player.

        Returns None if the player is absent, not ALIVE, or has no legal
        move. A single legal move is returned without consulting the
        strategy (and without drawing from the random stream).
        """
        player = state.get_player(player_id)
        if player is None or not player.is_alive:
            return None

        moves = legal_moves(player.row, player.col, state.board_size, state.grid)
        if not moves:
            return None
        if len(moves) == 1:
            return moves[0]

        name = player.ai_strategy or self.default
        fn = self._strategies.get(name)
        if fn is None:
            fn = self._strategies[self.resolve_name(name)]
        return fn(state, player, moves)


def create_default_registry() -> StrategyRegistry:
    """Registry with the built-in strategies registered."""
    from knightsprint.strategies.heuristics import register_builtin_strategies

    registry = StrategyRegistry()
    register_builtin_strategies(registry)
    return registry
