"""Snapshot export and replay for KnightSprint.

A snapshot is a JSON-safe dict describing a game: configuration, current
grid and players, and the full move history. Re-running initialization from
the snapshot's configuration and replaying its history reproduces the same
state, which is how exported games are verified.

Snapshot layout (camelCase keys):
    boardSize, seed, turn, phase,
    players: [{id, isHuman, status, row, col, score, aiStrategy}],
    grid, obstacles,
    ruleset: {timerSeconds, obstacleCount, fogOfWar, shrinkBoard},
    history: [{turn, moves: [{playerId, from, to}]}]
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from knightsprint.engine.evaluation import evaluate
from knightsprint.engine.resolution import resolve, submit_intent
from knightsprint.engine.setup import init_state
from knightsprint.models.config import GameConfig
from knightsprint.models.state import GameState, TurnRecord

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = (
    "boardSize",
    "seed",
    "turn",
    "phase",
    "players",
    "grid",
    "obstacles",
    "ruleset",
    "history",
)


def serialize_state(state: GameState) -> dict[str, Any]:
    """Reduce a GameState to its JSON-safe snapshot dict."""
    dumped = state.model_dump(
        mode="json",
        by_alias=True,
        exclude={"rng", "pending_intents"},
    )
    return {key: dumped[key] for key in SNAPSHOT_KEYS}


def snapshot_to_json(state: GameState, indent: int | None = None) -> str:
    return json.dumps(serialize_state(state), indent=indent)


def config_from_snapshot(snapshot: dict[str, Any]) -> GameConfig:
    """Rebuild the GameConfig a snapshot was created with.

    Raises:
        ValueError: If the snapshot is missing fields or holds invalid values
    """
    try:
        players = snapshot["players"]
        ruleset = snapshot.get("ruleset", {})
        strategies = {
            p["id"]: p["aiStrategy"]
            for p in players
            if not p["isHuman"] and p.get("aiStrategy")
        }
        return GameConfig(
            board_size=snapshot["boardSize"],
            seed=snapshot["seed"],
            player_count=len(players),
            cpu_count=sum(1 for p in players if not p["isHuman"]),
            timer_seconds=ruleset.get("timerSeconds", 0),
            obstacle_count=ruleset.get("obstacleCount", 0),
            player_strategies=strategies,
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise ValueError(f"Malformed snapshot: {e}") from e


def replay_snapshot(snapshot: dict[str, Any]) -> GameState:
    """Re-initialize from a snapshot's configuration and replay its history.

    Each recorded turn is replayed by submitting its executed moves, then
    resolving and evaluating, exactly as the original rounds were played.
    Cancelled intents (collisions, blocked moves) changed nothing, so the
    executed moves alone reproduce every round.

    Returns:
        The reproduced GameState

    Raises:
        ValueError: If the snapshot is malformed
    """
    config = config_from_snapshot(snapshot)
    state = init_state(config)

    try:
        history = [TurnRecord.model_validate(record) for record in snapshot.get("history", [])]
    except ValidationError as e:
        raise ValueError(f"Malformed snapshot history: {e}") from e

    for record in history:
        if state.is_game_over():
            logger.warning(f"Snapshot history continues past game over at turn {record.turn}")
            break
        for move in record.moves:
            state = submit_intent(state, move.player_id, move.to)
        state, _ = resolve(state)
        state, _ = evaluate(state)

    return state


def verify_replay(snapshot: dict[str, Any]) -> bool:
    """Whether replaying a snapshot reproduces it exactly."""
    replayed = serialize_state(replay_snapshot(snapshot))
    # Round-trip through JSON so tuples and lists compare equal.
    return json.loads(json.dumps(replayed)) == json.loads(json.dumps(snapshot))
