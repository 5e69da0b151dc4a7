"""Game configuration model for KnightSprint.

GameConfig collects everything needed to initialize a game. Values outside
their documented ranges raise pydantic.ValidationError at construction;
problems that only show up on the board (too little room for obstacles, a
start square without moves) degrade during play instead.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from knightsprint.parameters import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_CPU_COUNT,
    DEFAULT_PLAYER_COUNT,
    MAX_PLAYERS,
    MIN_BOARD_SIZE,
    MIN_PLAYERS,
)


class GameConfig(BaseModel):
    """Initialization options for one game.

    Attributes:
        board_size: Board edge length (>= 3)
        seed: Seed for every randomized outcome; None picks one at setup
        player_count: Number of knights (2-4)
        cpu_count: How many of them are CPU controlled; CPU seats are the last ones
        timer_seconds: Per-round human time limit, 0 for none
        obstacle_count: Requested obstacle count (may be placed partially)
        ai_strategy: Strategy for CPU seats, alternated with a second built-in
            across seats when more than one CPU plays
        player_strategies: Per-seat strategy overrides, taking precedence
    """

    board_size: int = Field(default=DEFAULT_BOARD_SIZE, ge=MIN_BOARD_SIZE)
    seed: Optional[int] = None
    player_count: int = Field(default=DEFAULT_PLAYER_COUNT, ge=MIN_PLAYERS, le=MAX_PLAYERS)
    cpu_count: int = Field(default=DEFAULT_CPU_COUNT, ge=0)
    timer_seconds: float = Field(default=0, ge=0)
    obstacle_count: int = Field(default=0, ge=0)
    ai_strategy: Optional[str] = None
    player_strategies: dict[int, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_cpu_count(self) -> "GameConfig":
        """cpu_count must lie in [0, player_count]."""
        if self.cpu_count > self.player_count:
            raise ValueError(
                f"cpu_count ({self.cpu_count}) cannot exceed player_count ({self.player_count})"
            )
        return self

    @property
    def human_count(self) -> int:
        return self.player_count - self.cpu_count
