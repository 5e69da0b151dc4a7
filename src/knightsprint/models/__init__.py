"""KnightSprint game models.

This module exports the core data structures for the game.
"""

from .board import (
    EMPTY,
    KNIGHT_OFFSETS,
    OBSTACLE,
    OWNER_BASE,
    Cell,
    Grid,
    copy_grid,
    in_bounds,
    is_knight_move,
    is_occupied,
    knight_neighbours,
    legal_moves,
    make_grid,
    mobility,
    occupied_count,
    owner_marker,
    owner_of,
    temporarily_occupied,
)
from .config import GameConfig
from .events import (
    BlockedEvent,
    CollisionEvent,
    EliminationEvent,
    GameEvent,
    MoveEvent,
    WinnerEvent,
    events_from_dicts,
    events_to_dicts,
)
from .rng import SeededGenerator, coerce_seed, make_generator
from .state import (
    GameState,
    MoveRecord,
    Phase,
    PlayerState,
    PlayerStatus,
    Ruleset,
    TurnRecord,
)

__all__ = [
    # Board
    "EMPTY",
    "OBSTACLE",
    "OWNER_BASE",
    "KNIGHT_OFFSETS",
    "Cell",
    "Grid",
    "copy_grid",
    "in_bounds",
    "is_knight_move",
    "is_occupied",
    "knight_neighbours",
    "legal_moves",
    "make_grid",
    "mobility",
    "occupied_count",
    "owner_marker",
    "owner_of",
    "temporarily_occupied",
    # Generator
    "SeededGenerator",
    "coerce_seed",
    "make_generator",
    # State
    "GameConfig",
    "GameState",
    "MoveRecord",
    "Phase",
    "PlayerState",
    "PlayerStatus",
    "Ruleset",
    "TurnRecord",
    # Events
    "BlockedEvent",
    "CollisionEvent",
    "EliminationEvent",
    "GameEvent",
    "MoveEvent",
    "WinnerEvent",
    "events_from_dicts",
    "events_to_dicts",
]
