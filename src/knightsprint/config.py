"""Environment configuration for KnightSprint.

Defaults can be overridden via environment variables:
    KNIGHTSPRINT_BOARD_SIZE: Board edge length (default: 8)
    KNIGHTSPRINT_PLAYER_COUNT: Number of knights (default: 2)
    KNIGHTSPRINT_CPU_COUNT: CPU-controlled knights (default: 1)
    KNIGHTSPRINT_OBSTACLE_COUNT: Requested obstacles (default: 0)
    KNIGHTSPRINT_TIMER_SECONDS: Human time limit per round, 0 = none (default: 0)
    KNIGHTSPRINT_THINK_SECONDS: Pause before CPU moves (default: 0.32)
    KNIGHTSPRINT_SNAPSHOTS_PATH: Directory for exported snapshots (default: "snapshots")
    KNIGHTSPRINT_LOG_LEVEL: Logging level name (default: "WARNING")
"""

import os

from knightsprint.models.config import GameConfig
from knightsprint.parameters import (
    AI_THINK_SECONDS,
    DEFAULT_BOARD_SIZE,
    DEFAULT_CPU_COUNT,
    DEFAULT_PLAYER_COUNT,
)

DEFAULT_SNAPSHOTS_PATH = "snapshots"
DEFAULT_LOG_LEVEL = "WARNING"


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return float(value)


def get_board_size() -> int:
    return _env_int("KNIGHTSPRINT_BOARD_SIZE", DEFAULT_BOARD_SIZE)


def get_player_count() -> int:
    return _env_int("KNIGHTSPRINT_PLAYER_COUNT", DEFAULT_PLAYER_COUNT)


def get_cpu_count() -> int:
    return _env_int("KNIGHTSPRINT_CPU_COUNT", DEFAULT_CPU_COUNT)


def get_obstacle_count() -> int:
    return _env_int("KNIGHTSPRINT_OBSTACLE_COUNT", 0)


def get_timer_seconds() -> float:
    return _env_float("KNIGHTSPRINT_TIMER_SECONDS", 0.0)


def get_think_seconds() -> float:
    """Get configured CPU pacing delay from environment."""
    return _env_float("KNIGHTSPRINT_THINK_SECONDS", AI_THINK_SECONDS)


def get_snapshots_path() -> str:
    """Get configured snapshots directory from environment."""
    return os.environ.get("KNIGHTSPRINT_SNAPSHOTS_PATH", DEFAULT_SNAPSHOTS_PATH)


def get_log_level() -> str:
    return os.environ.get("KNIGHTSPRINT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def load_game_config(**overrides) -> GameConfig:
    """Build a GameConfig from environment defaults plus explicit overrides.

    Overrides whose value is None are ignored, so CLI arguments that were
    not given fall through to the environment.

    Raises:
        ValueError: If an environment variable is not a number
        pydantic.ValidationError: If the combined options are out of range
    """
    values = {
        "board_size": get_board_size(),
        "player_count": get_player_count(),
        "cpu_count": get_cpu_count(),
        "obstacle_count": get_obstacle_count(),
        "timer_seconds": get_timer_seconds(),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return GameConfig(**values)
