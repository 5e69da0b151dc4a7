"""Game state models for KnightSprint.

This module defines the pydantic models that make up a game snapshot. A
GameState is treated as a value: engine transitions return a new state via
``model_copy(update=...)`` and never change one that has been handed out.
The only exception is the strategy layer, which may borrow ``grid`` through
``temporarily_occupied`` and must hand it back unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from knightsprint.models.board import Cell, Grid
from knightsprint.models.rng import SeededGenerator


class CamelModel(BaseModel):
    """Base model dumping camelCase keys for the snapshot wire format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Phase(str, Enum):
    """Turn phase of the engine state machine.

    ANIMATE belongs to the presentation layer and is not modelled here.
    Inherits from str for proper JSON serialization.
    """

    SETUP = "setup"
    SELECT = "select"
    RESOLVE = "resolve"
    EVALUATE = "evaluate"
    GAMEOVER = "gameover"


class PlayerStatus(str, Enum):
    """Player lifecycle. Transitions only move forward; no resurrection."""

    ALIVE = "alive"
    ELIMINATED = "eliminated"
    WINNER = "winner"


class PlayerState(CamelModel):
    """Per-player state.

    Attributes:
        id: Seat index, stable for the whole game
        is_human: Whether intents come from the input layer
        status: ALIVE, ELIMINATED or WINNER
        row: Current row
        col: Current column
        score: Distinct cells ever occupied (start square counts as 1)
        ai_strategy: Strategy name for CPU players, None for humans
    """

    id: int = Field(ge=0)
    is_human: bool = False
    status: PlayerStatus = PlayerStatus.ALIVE
    row: int
    col: int
    score: int = Field(default=1, ge=1)
    ai_strategy: Optional[str] = None

    @property
    def position(self) -> Cell:
        return (self.row, self.col)

    @property
    def is_alive(self) -> bool:
        return self.status == PlayerStatus.ALIVE


class Ruleset(CamelModel):
    """Per-game rule options.

    timer_seconds is consumed by the orchestrator only. fog_of_war and
    shrink_board are carried for snapshot compatibility and have no effect.
    """

    timer_seconds: float = Field(default=0, ge=0)
    obstacle_count: int = Field(default=0, ge=0)
    fog_of_war: bool = False
    shrink_board: bool = False


class MoveRecord(CamelModel):
    """One executed move inside a turn record."""

    player_id: int
    from_: Cell = Field(alias="from")
    to: Cell


class TurnRecord(CamelModel):
    """History entry for one resolution: the moves that actually executed."""

    turn: int
    moves: list[MoveRecord] = Field(default_factory=list)


class GameState(CamelModel):
    """Complete game state.

    Transitions copy the model shallowly, so every state of one game holds
    the same ``rng`` object. Only the latest state may be used to compute
    moves; drawing through an older state advances the live stream.

    Attributes:
        board_size: Edge length of the square board
        seed: Seed the random stream was derived from
        rng: Live random stream, shared by successive states of one game
        turn: Completed resolutions so far
        phase: Current phase
        grid: Cell markers (see knightsprint.models.board)
        players: Players ordered by id
        pending_intents: player id -> destination for the current round
        obstacles: Obstacle cells chosen at initialization
        ruleset: Rule options
        history: Append-only record of executed moves per turn
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    board_size: int = Field(ge=3)
    seed: int
    rng: SeededGenerator = Field(exclude=True, repr=False)
    turn: int = Field(default=0, ge=0)
    phase: Phase = Phase.SELECT
    grid: Grid
    players: list[PlayerState]
    pending_intents: dict[int, Cell] = Field(default_factory=dict)
    obstacles: list[Cell] = Field(default_factory=list)
    ruleset: Ruleset = Field(default_factory=Ruleset)
    history: list[TurnRecord] = Field(default_factory=list)

    def get_player(self, player_id: int) -> Optional[PlayerState]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def living_players(self) -> list[PlayerState]:
        return [p for p in self.players if p.is_alive]

    def opponents_of(self, player_id: int) -> list[PlayerState]:
        """Living players other than the given one."""
        return [p for p in self.players if p.id != player_id and p.is_alive]

    def winners(self) -> list[PlayerState]:
        return [p for p in self.players if p.status == PlayerStatus.WINNER]

    @property
    def total_cells(self) -> int:
        return self.board_size * self.board_size

    def is_game_over(self) -> bool:
        return self.phase == Phase.GAMEOVER
