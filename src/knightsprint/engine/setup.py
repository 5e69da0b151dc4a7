"""Game initialization for KnightSprint.

Builds the initial GameState from a GameConfig: board sizing, roster,
corner-biased start squares and seeded obstacle placement.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from knightsprint.models.board import (
    OBSTACLE,
    Cell,
    knight_neighbours,
    make_grid,
    owner_marker,
)
from knightsprint.models.config import GameConfig
from knightsprint.models.rng import SeededGenerator, make_generator
from knightsprint.models.state import GameState, Phase, PlayerState, Ruleset
from knightsprint.parameters import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_CPU_COUNT,
    DEFAULT_PLAYER_COUNT,
    OBSTACLE_DRAW_BUDGET,
    SEED_UPPER_BOUND,
    START_PAD_DIVISOR,
)
from knightsprint.strategies.registry import StrategyName

logger = logging.getLogger(__name__)


def start_positions(player_count: int, size: int) -> list[Cell]:
    """Deterministic corner-biased start squares.

    Corners are inset by floor(size / 5) and taken in a fixed order:
    top-left, bottom-right, top-right, bottom-left.
    """
    pad = size // START_PAD_DIVISOR
    far = size - 1 - pad
    corners = [
        (pad, pad),
        (far, far),
        (pad, far),
        (far, pad),
    ]
    return corners[:player_count]


def place_obstacles(
    size: int,
    rng: SeededGenerator,
    starts: list[Cell],
    count: int,
    budget: int = OBSTACLE_DRAW_BUDGET,
) -> list[Cell]:
    """Place obstacles by rejection sampling on the game's random stream.

    Start squares and every knight-neighbour of a start are forbidden so no
    player is walled in on turn one by an obstacle. Each attempt draws a row
    then a column. Stops after ``count`` placements or ``budget`` attempts,
    whichever comes first; a shortfall is accepted.
    """
    obstacles: list[Cell] = []
    forbidden: set[Cell] = set(starts)
    for r, c in starts:
        forbidden.update(knight_neighbours(r, c))

    attempts = 0
    while len(obstacles) < count and attempts < budget:
        attempts += 1
        r = rng.randbelow(size)
        c = rng.randbelow(size)
        if (r, c) not in forbidden:
            obstacles.append((r, c))
            forbidden.add((r, c))

    if len(obstacles) < count:
        logger.warning(
            f"Placed {len(obstacles)} of {count} obstacles after {attempts} draws "
            f"on a {size}x{size} board"
        )
    return obstacles


def default_strategy_for(player_id: int, ai_strategy: Optional[str] = None) -> str:
    """Strategy for a CPU seat when no per-seat override exists.

    Without a configured strategy, odd seats play mobility and even seats
    aggressor. With one, even seats play it and odd seats play the other of
    mobility/aggressor so that several CPUs do not mirror each other.
    """
    if ai_strategy is None:
        if player_id % 2 == 1:
            return StrategyName.MOBILITY.value
        return StrategyName.AGGRESSOR.value
    if player_id % 2 == 0:
        return ai_strategy
    if ai_strategy == StrategyName.MOBILITY.value:
        return StrategyName.AGGRESSOR.value
    return StrategyName.MOBILITY.value


def build_roster(config: GameConfig, starts: list[Cell]) -> list[PlayerState]:
    """Create players; the first ``human_count`` seats are human."""
    players = []
    for i in range(config.player_count):
        is_human = i < config.human_count
        strategy = None
        if not is_human:
            strategy = config.player_strategies.get(i) or default_strategy_for(i, config.ai_strategy)
        row, col = starts[i]
        players.append(
            PlayerState(id=i, is_human=is_human, row=row, col=col, score=1, ai_strategy=strategy)
        )
    return players


def resolve_seed(seed: Optional[int]) -> int:
    """Return the configured seed, or pick one when the caller gave none."""
    if seed is not None:
        return seed
    picked = random.randrange(SEED_UPPER_BOUND)
    logger.info(f"No seed supplied, using {picked}")
    return picked


def init_state(config: GameConfig) -> GameState:
    """Create the initial GameState for a game.

    Args:
        config: Validated game configuration

    Returns:
        GameState in the SELECT phase at turn 0
    """
    seed = resolve_seed(config.seed)
    size = config.board_size
    rng = make_generator(seed)

    starts = start_positions(config.player_count, size)
    players = build_roster(config, starts)

    grid = make_grid(size)
    for player in players:
        grid[player.row][player.col] = owner_marker(player.id)

    obstacles = place_obstacles(size, rng, starts, config.obstacle_count)
    for r, c in obstacles:
        grid[r][c] = OBSTACLE

    logger.info(
        f"New game: {size}x{size}, seed={seed}, players={config.player_count} "
        f"(cpu={config.cpu_count}), obstacles={len(obstacles)}"
    )

    return GameState(
        board_size=size,
        seed=seed,
        rng=rng,
        turn=0,
        phase=Phase.SELECT,
        grid=grid,
        players=players,
        obstacles=obstacles,
        ruleset=Ruleset(
            timer_seconds=config.timer_seconds,
            obstacle_count=config.obstacle_count,
        ),
    )


def create_game(
    board_size: int = DEFAULT_BOARD_SIZE,
    seed: Optional[int] = None,
    player_count: int = DEFAULT_PLAYER_COUNT,
    cpu_count: int = DEFAULT_CPU_COUNT,
    obstacle_count: int = 0,
    timer_seconds: float = 0,
    ai_strategy: Optional[str] = None,
    player_strategies: Optional[dict[int, str]] = None,
) -> GameState:
    """Create a new game from keyword options.

    Raises:
        pydantic.ValidationError: If an option is outside its allowed range
    """
    config = GameConfig(
        board_size=board_size,
        seed=seed,
        player_count=player_count,
        cpu_count=cpu_count,
        obstacle_count=obstacle_count,
        timer_seconds=timer_seconds,
        ai_strategy=ai_strategy,
        player_strategies=player_strategies or {},
    )
    return init_state(config)
