"""Elimination and win detection for KnightSprint."""

from __future__ import annotations

import logging

from knightsprint.models.board import legal_moves
from knightsprint.models.events import EliminationEvent, WinnerEvent
from knightsprint.models.state import GameState, Phase, PlayerStatus

logger = logging.getLogger(__name__)


def turn_limit(state: GameState) -> int:
    """Rounds after which the game ends even if several players can still move."""
    return state.total_cells - len(state.obstacles)


def evaluate(state: GameState) -> tuple[GameState, list]:
    """Eliminate stuck players and decide whether the game is over.

    Every ALIVE player without a legal move is ELIMINATED in one pass. Then:
    - one survivor: it is the WINNER and the game ends
    - no survivors: every player holding the maximum score (over all
      players, eliminated earlier or not) is a WINNER and the game ends
    - otherwise the next round starts in SELECT

    Repeated collisions can stall a game indefinitely, so once ``turn``
    reaches turn_limit() the remaining players are eliminated as well and
    the no-survivor rule decides the winners.

    Returns:
        Tuple of (next state, ordered elimination/winner events)
    """
    if state.is_game_over():
        return state, []

    players = [p.model_copy() for p in state.players]
    events: list = []

    for player in players:
        if not player.is_alive:
            continue
        if not legal_moves(player.row, player.col, state.board_size, state.grid):
            player.status = PlayerStatus.ELIMINATED
            events.append(EliminationEvent(player_id=player.id, score=player.score))
            logger.debug(f"Player {player.id} eliminated with score {player.score}")

    survivors = [p for p in players if p.is_alive]

    limit = turn_limit(state)
    if len(survivors) > 1 and state.turn >= limit:
        logger.warning(
            f"Turn limit {limit} reached with {len(survivors)} players still moving, ending game"
        )
        for player in survivors:
            player.status = PlayerStatus.ELIMINATED
            events.append(EliminationEvent(player_id=player.id, score=player.score))
        survivors = []

    if len(survivors) == 1:
        survivors[0].status = PlayerStatus.WINNER
        events.append(WinnerEvent(player_id=survivors[0].id))
        phase = Phase.GAMEOVER
    elif not survivors:
        best = max(p.score for p in players)
        for player in players:
            if player.score == best:
                player.status = PlayerStatus.WINNER
                events.append(WinnerEvent(player_id=player.id))
        phase = Phase.GAMEOVER
    else:
        phase = Phase.SELECT

    if phase == Phase.GAMEOVER:
        winner_ids = [p.id for p in players if p.status == PlayerStatus.WINNER]
        logger.info(f"Game over after turn {state.turn}: winners {winner_ids}")

    next_state = state.model_copy(update={"players": players, "phase": phase})
    return next_state, events
