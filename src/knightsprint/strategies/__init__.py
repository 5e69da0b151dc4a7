"""CPU strategies for KnightSprint.

Usage:
    from knightsprint.strategies import create_default_registry

    registry = create_default_registry()
    registry.register("cautious", my_strategy)
    move = registry.compute_move(state, player_id=1)
"""

from knightsprint.strategies.heuristics import (
    BUILTIN_STRATEGIES,
    aggressor_strategy,
    balanced_strategy,
    mobility_strategy,
    register_builtin_strategies,
)
from knightsprint.strategies.registry import (
    StrategyFn,
    StrategyName,
    StrategyRegistry,
    create_default_registry,
)

__all__ = [
    "StrategyFn",
    "StrategyName",
    "StrategyRegistry",
    "create_default_registry",
    "register_builtin_strategies",
    "BUILTIN_STRATEGIES",
    "mobility_strategy",
    "aggressor_strategy",
    "balanced_strategy",
]
