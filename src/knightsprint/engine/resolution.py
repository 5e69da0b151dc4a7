"""Simultaneous move resolution for KnightSprint.

Intents are collected privately during SELECT and applied together in one
pass. Resolution judges each intent against the grid as it stands when that
intent is processed, iterating in player-id order:

1. Tally on-board destinations over every living player's intent
2. Shared destination -> collision, nobody moves there
3. Not a knight move from the player's square -> dropped as a pass
4. Destination no longer EMPTY -> blocked
5. Otherwise the move executes

Step 4 depends on processing order. The order is fixed (player id) and is
never permuted.
"""

from __future__ import annotations

import logging
from collections import Counter

from knightsprint.models.board import (
    EMPTY,
    Cell,
    copy_grid,
    in_bounds,
    is_knight_move,
    owner_marker,
)
from knightsprint.models.events import BlockedEvent, CollisionEvent, MoveEvent
from knightsprint.models.state import GameState, MoveRecord, Phase, TurnRecord

logger = logging.getLogger(__name__)


def submit_intent(state: GameState, player_id: int, destination: Cell) -> GameState:
    """Record a pending destination for a living player.

    Overwrites any earlier intent of the same player this round. Legality is
    not checked here; resolution judges it against the pre-resolution grid.
    Intents for unknown or non-living players, or after the game is over,
    are ignored and the input state is returned unchanged.

    Args:
        state: Current game state
        player_id: Submitting player
        destination: (row, col) target

    Returns:
        New GameState with the intent recorded
    """
    if state.is_game_over():
        logger.debug(f"Ignoring intent from player {player_id}: game is over")
        return state

    player = state.get_player(player_id)
    if player is None or not player.is_alive:
        logger.debug(f"Ignoring intent from player {player_id}: not a living player")
        return state

    pending = dict(state.pending_intents)
    pending[player_id] = (int(destination[0]), int(destination[1]))
    return state.model_copy(update={"pending_intents": pending})


def resolve(state: GameState) -> tuple[GameState, list]:
    """Apply all pending intents simultaneously.

    Players without an intent pass and keep their square. Executed moves
    mark the destination with the mover's owner marker; the square left
    behind stays owned forever.

    Args:
        state: State holding this round's intents

    Returns:
        Tuple of (next state in EVALUATE, ordered move/collision/blocked events)
    """
    if state.is_game_over():
        return state, []

    grid = copy_grid(state.grid)
    players = [p.model_copy() for p in state.players]
    events: list = []

    intents: dict[int, Cell] = {}
    for player in players:
        if player.is_alive and player.id in state.pending_intents:
            intents[player.id] = state.pending_intents[player.id]

    # Off-board squares never collide; non-knight squares on the board do.
    dest_count = Counter(d for d in intents.values() if in_bounds(d[0], d[1], state.board_size))
    contenders: dict[Cell, list[int]] = {}
    for player_id, dest in intents.items():
        contenders.setdefault(dest, []).append(player_id)

    reported_collisions: set[Cell] = set()
    record = TurnRecord(turn=state.turn)

    for player in players:
        dest = intents.get(player.id)
        if dest is None:
            continue

        if dest_count[dest] > 1:
            if dest not in reported_collisions:
                reported_collisions.add(dest)
                events.append(CollisionEvent(square=dest, player_ids=contenders[dest]))
            continue

        nr, nc = dest
        if not in_bounds(nr, nc, state.board_size) or not is_knight_move(player.position, dest):
            logger.debug(f"Dropping illegal intent {dest} from player {player.id} at {player.position}")
            continue

        if grid[nr][nc] != EMPTY:
            events.append(BlockedEvent(player_id=player.id, square=dest))
            continue

        origin = player.position
        grid[nr][nc] = owner_marker(player.id)
        player.row = nr
        player.col = nc
        player.score += 1
        events.append(MoveEvent(player_id=player.id, from_=origin, to=dest))
        record.moves.append(MoveRecord(player_id=player.id, from_=origin, to=dest))

    logger.debug(
        f"Turn {state.turn} resolved: {len(record.moves)} moves, "
        f"{len(reported_collisions)} collisions"
    )

    next_state = state.model_copy(
        update={
            "grid": grid,
            "players": players,
            "pending_intents": {},
            "history": [*state.history, record],
            "turn": state.turn + 1,
            "phase": Phase.EVALUATE,
        }
    )
    return next_state, events
