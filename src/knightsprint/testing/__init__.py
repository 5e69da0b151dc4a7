"""Headless game running for KnightSprint.

Usage:
    from knightsprint.models import GameConfig
    from knightsprint.testing import run_game_sync

    result = run_game_sync(GameConfig(seed=42, player_count=4, cpu_count=4))
    print(result.winners, result.turns_played)
"""

from knightsprint.testing.game_runner import GameResult, GameRunner, run_game_sync

__all__ = [
    "GameResult",
    "GameRunner",
    "run_game_sync",
]
