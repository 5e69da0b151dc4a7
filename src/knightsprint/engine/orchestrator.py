"""Turn orchestrator for KnightSprint.

This module implements the phase state machine that sequences a round:

1. SELECT   - Expose human legal moves, collect human intents (optional timer)
2. (pacing) - Short "thinking" pause before CPU intents
3. CPU      - Compute CPU intents in player-id order via the strategy registry
4. RESOLVE  - Apply all intents simultaneously
5. EVALUATE - Eliminations and win detection
6. Loop to SELECT, or stop at GAMEOVER

Human input arrives either through submit_human_intent() (called by the
input layer) or through an async intent provider passed to play_round().
Suspension points never affect outcomes: the same seed and the same human
intents always produce the same game.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from knightsprint.config import get_think_seconds
from knightsprint.engine.errors import GameOverError
from knightsprint.engine.evaluation import evaluate
from knightsprint.engine.resolution import resolve, submit_intent
from knightsprint.engine.serialization import serialize_state
from knightsprint.models.board import Cell, legal_moves
from knightsprint.models.state import GameState, Phase
from knightsprint.strategies.registry import StrategyRegistry

logger = logging.getLogger(__name__)

IntentProvider = Callable[[GameState, int, list[Cell]], Awaitable[Optional[Cell]]]
EventListener = Callable[[object], None]


@dataclass
class RoundResult:
    """Outcome of one round.

    Attributes:
        turn: Turn number that was resolved
        events: Resolution events followed by evaluation events
        state: State after evaluation (SELECT or GAMEOVER)
    """

    turn: int
    events: list = field(default_factory=list)
    state: Optional[GameState] = None

    @property
    def game_over(self) -> bool:
        return self.state is not None and self.state.is_game_over()


class TurnOrchestrator:
    """Runs rounds of a game over a sequence of immutable states.

    Attributes:
        registry: Strategy registry used for CPU players
        timer_seconds: Human time limit per round, 0 for none
        think_seconds: Pause before CPU intents are computed
        human_legal_moves: Legal moves of each living human in the open SELECT
    """

    def __init__(
        self,
        state: GameState,
        registry: StrategyRegistry,
        timer_seconds: Optional[float] = None,
        think_seconds: Optional[float] = None,
    ) -> None:
        """Initialize the orchestrator.

        CPU strategy names are resolved against the registry here, once;
        unknown names fall back to the registry default with a warning.

        Args:
            state: Initial game state
            registry: Strategy registry for CPU players
            timer_seconds: Override for the ruleset's timer
            think_seconds: Pacing delay before CPU intents (default: KNIGHTSPRINT_THINK_SECONDS)
        """
        self.registry = registry
        self._state = registry.resolve_roster(state)
        self.timer_seconds = state.ruleset.timer_seconds if timer_seconds is None else timer_seconds
        self.think_seconds = get_think_seconds() if think_seconds is None else think_seconds

        self.human_legal_moves: dict[int, list[Cell]] = {}
        self._listeners: list[EventListener] = []
        self._timer: Optional[asyncio.TimerHandle] = None
        self._humans_ready: Optional[asyncio.Event] = None
        self._select_open = False

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def is_game_over(self) -> bool:
        return self._state.is_game_over()

    def snapshot(self) -> dict:
        return serialize_state(self._state)

    def add_listener(self, listener: EventListener) -> None:
        """Subscribe to round events (move, collision, blocked, elimination, winner)."""
        self._listeners.append(listener)

    # =========================================================================
    # SELECT phase
    # =========================================================================

    def begin_select(self) -> dict[int, list[Cell]]:
        """Open the SELECT phase for the current round.

        Cancels any timer left from an earlier round, computes each living
        human's legal moves and arms the round timer if one is configured.
        Must be called from inside a running event loop.

        Returns:
            Mapping of human player id to legal moves

        Raises:
            GameOverError: If the game has already ended
        """
        if self.is_game_over():
            raise GameOverError("Game is already over")

        self.cancel_timer()
        self.human_legal_moves = {
            p.id: legal_moves(p.row, p.col, self._state.board_size, self._state.grid)
            for p in self._state.players
            if p.is_human and p.is_alive
        }
        self._humans_ready = asyncio.Event()
        self._select_open = True

        if self._humans_settled():
            self._humans_ready.set()
        elif self.timer_seconds > 0:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self.timer_seconds, self._on_timeout)

        return {pid: list(moves) for pid, moves in self.human_legal_moves.items()}

    def submit_human_intent(self, player_id: int, destination: Cell) -> bool:
        """Stage a human's destination for this round.

        Only accepted during an open SELECT, for a living human, and for one
        of that human's legal moves. A later submission replaces an earlier
        one until the round proceeds.

        Returns:
            True if the intent was recorded
        """
        if not self._select_open:
            logger.debug(f"Rejecting intent from player {player_id}: SELECT is not open")
            return False

        moves = self.human_legal_moves.get(player_id)
        dest = (int(destination[0]), int(destination[1]))
        if not moves or dest not in moves:
            logger.debug(f"Rejecting intent {dest} from player {player_id}: not a legal move")
            return False

        self._state = submit_intent(self._state, player_id, dest)
        if self._humans_settled():
            self.cancel_timer()
            self._humans_ready.set()
        return True

    def cancel_timer(self) -> None:
        """Cancel the outstanding round timer, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _humans_settled(self) -> bool:
        """Every living human that can move has an intent."""
        pending = self._state.pending_intents
        return all(pid in pending for pid, moves in self.human_legal_moves.items() if moves)

    def _on_timeout(self) -> None:
        """Timer expiry: force the first legal move for every undecided human."""
        self._timer = None
        if not self._select_open:
            return
        for pid, moves in self.human_legal_moves.items():
            if moves and pid not in self._state.pending_intents:
                logger.info(f"Player {pid} timed out, submitting {moves[0]}")
                self._state = submit_intent(self._state, pid, moves[0])
        self._humans_ready.set()

    async def _collect_human_intents(self, intent_provider: Optional[IntentProvider]) -> None:
        """Wait until every human is settled, asking the provider if given."""
        if intent_provider is None:
            await self._humans_ready.wait()
            return

        asks = [
            asyncio.ensure_future(self._ask_provider(intent_provider, pid, moves))
            for pid, moves in self.human_legal_moves.items()
            if moves and pid not in self._state.pending_intents
        ]
        waiter = asyncio.ensure_future(self._humans_ready.wait())
        pending = {waiter, *asks}
        try:
            while not waiter.done():
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    if task is not waiter and task.exception() is not None:
                        raise task.exception()
        finally:
            for task in pending:
                task.cancel()

    async def _ask_provider(
        self, intent_provider: IntentProvider, player_id: int, moves: list[Cell]
    ) -> None:
        """Submit the provider's answer, or the first legal move if it is unusable."""
        dest = await intent_provider(self._state, player_id, list(moves))
        if dest is not None and self.submit_human_intent(player_id, dest):
            return
        if not self._select_open or player_id in self._state.pending_intents:
            return
        logger.debug(f"Provider answer {dest} for player {player_id} rejected, submitting {moves[0]}")
        self.submit_human_intent(player_id, moves[0])

    # =========================================================================
    # Round execution
    # =========================================================================

    async def play_round(self, intent_provider: Optional[IntentProvider] = None) -> RoundResult:
        """Play one full round: SELECT, CPU intents, RESOLVE, EVALUATE.

        Args:
            intent_provider: Optional async callable returning a destination
                for a human, given (state, player_id, legal_moves)

        Returns:
            RoundResult with the round's events and the next state

        Raises:
            GameOverError: If the game has already ended
        """
        if self.is_game_over():
            raise GameOverError("Game is already over")

        if not self._select_open:
            self.begin_select()

        try:
            await self._collect_human_intents(intent_provider)
        finally:
            self.cancel_timer()
            self._select_open = False

        if self.think_seconds > 0:
            await asyncio.sleep(self.think_seconds)

        state = self._state
        for player in state.players:
            if player.is_human or not player.is_alive:
                continue
            move = self.registry.compute_move(state, player.id)
            if move is not None:
                state = submit_intent(state, player.id, move)

        turn = state.turn
        state = state.model_copy(update={"phase": Phase.RESOLVE})
        state, resolve_events = resolve(state)
        state, eval_events = evaluate(state)
        self._state = state
        self.human_legal_moves = {}

        events = [*resolve_events, *eval_events]
        for event in events:
            for listener in self._listeners:
                listener(event)

        logger.debug(f"Round {turn} finished in phase {state.phase.value} with {len(events)} events")
        return RoundResult(turn=turn, events=events, state=state)

    async def run(
        self,
        intent_provider: Optional[IntentProvider] = None,
        max_rounds: Optional[int] = None,
    ) -> GameState:
        """Play rounds until GAMEOVER (or max_rounds, if given).

        Returns:
            The last state reached
        """
        rounds = 0
        while not self.is_game_over():
            if max_rounds is not None and rounds >= max_rounds:
                break
            await self.play_round(intent_provider)
            rounds += 1
        return self._state
