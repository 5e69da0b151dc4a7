"""Game engine module for KnightSprint.

This module contains the core game logic including:
- setup: Start squares, roster and seeded obstacle placement
- resolution: Intent submission and simultaneous move resolution
- evaluation: Eliminations and win detection
- serialization: Snapshot export and replay
- orchestrator: The SELECT -> RESOLVE -> EVALUATE phase state machine

Usage:
    from knightsprint.engine import TurnOrchestrator, create_game
    from knightsprint.strategies import create_default_registry

    state = create_game(board_size=8, seed=42, player_count=2, cpu_count=1)
    game = TurnOrchestrator(state, create_default_registry())

    # Input layer: show legal moves, then submit the human's choice
    moves = game.begin_select()
    game.submit_human_intent(0, moves[0][0])

    result = await game.play_round()
    for event in result.events:
        print(event)
"""

from knightsprint.engine.errors import GameOverError
from knightsprint.engine.evaluation import evaluate
from knightsprint.engine.orchestrator import (
    EventListener,
    IntentProvider,
    RoundResult,
    TurnOrchestrator,
)
from knightsprint.engine.resolution import resolve, submit_intent
from knightsprint.engine.serialization import (
    config_from_snapshot,
    replay_snapshot,
    serialize_state,
    snapshot_to_json,
    verify_replay,
)
from knightsprint.engine.setup import (
    build_roster,
    create_game,
    default_strategy_for,
    init_state,
    place_obstacles,
    start_positions,
)

__all__ = [
    # Setup
    "create_game",
    "init_state",
    "start_positions",
    "place_obstacles",
    "build_roster",
    "default_strategy_for",
    # Transitions
    "submit_intent",
    "resolve",
    "evaluate",
    # Snapshots
    "serialize_state",
    "snapshot_to_json",
    "config_from_snapshot",
    "replay_snapshot",
    "verify_replay",
    # Orchestration
    "TurnOrchestrator",
    "RoundResult",
    "IntentProvider",
    "EventListener",
    "GameOverError",
]
