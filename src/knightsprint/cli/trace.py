"""Game trace logging for the KnightSprint CLI.

Records all game events for debugging and analysis:
- Per-round events (moves, collisions, blocked moves, eliminations, winners)
- Player positions, scores and statuses after each round
- Game outcome
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from knightsprint.models.events import events_to_dicts


@dataclass
class PlayerSnapshot:
    """Snapshot of one player at the end of a round."""

    player_id: int
    row: int
    col: int
    score: int
    status: str


@dataclass
class RoundRecord:
    """Record of a complete round."""

    turn: int
    phase_after: str
    events: list[dict[str, Any]]
    players: list[PlayerSnapshot]


@dataclass
class GameTrace:
    """Complete trace of a game session."""

    game_id: str
    seed: int
    board_size: int
    strategies: dict[str, Optional[str]]
    start_time: str
    end_time: str | None = None
    rounds: list[RoundRecord] = field(default_factory=list)
    ending: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "game_id": self.game_id,
            "seed": self.seed,
            "board_size": self.board_size,
            "strategies": self.strategies,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "rounds": [asdict(r) for r in self.rounds],
            "ending": self.ending,
        }


class TraceLogger:
    """Logger for game trace events."""

    def __init__(
        self,
        seed: int,
        board_size: int,
        strategies: dict[int, Optional[str]],
        output_dir: Path | None = None,
    ):
        """Initialize trace logger.

        Args:
            seed: Game seed
            board_size: Board edge length
            strategies: Strategy name per player id (None for humans)
            output_dir: Directory for trace files (default: ./traces)
        """
        self.output_dir = output_dir or Path("traces")
        self.output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        game_id = f"seed{seed}_{board_size}x{board_size}_{timestamp}"

        self.trace = GameTrace(
            game_id=game_id,
            seed=seed,
            board_size=board_size,
            strategies={str(pid): name for pid, name in strategies.items()},
            start_time=datetime.now().isoformat(),
        )
        self._output_file = self.output_dir / f"{game_id}.json"

    @property
    def output_file(self) -> Path:
        return self._output_file

    def record_round(self, round_result) -> None:
        """Record a complete round.

        Args:
            round_result: RoundResult from TurnOrchestrator.play_round()
        """
        state = round_result.state
        players = [
            PlayerSnapshot(
                player_id=p.id,
                row=p.row,
                col=p.col,
                score=p.score,
                status=p.status.value,
            )
            for p in state.players
        ]
        self.trace.rounds.append(
            RoundRecord(
                turn=round_result.turn,
                phase_after=state.phase.value,
                events=events_to_dicts(round_result.events),
                players=players,
            )
        )
        self.save()

    def record_ending(self, ending: str, winners: list[int], scores: dict[int, int]) -> None:
        """Record the game ending.

        Args:
            ending: "last_survivor", "mutual_elimination" or "unfinished"
            winners: Winning player ids
            scores: Final score per player id
        """
        self.trace.end_time = datetime.now().isoformat()
        self.trace.ending = {
            "type": ending,
            "winners": winners,
            "scores": {str(pid): score for pid, score in scores.items()},
        }
        self.save()

    def save(self) -> Path:
        """Save the trace to a JSON file.

        Returns:
            Path to the saved file
        """
        with open(self._output_file, "w") as f:
            json.dump(self.trace.to_dict(), f, indent=2)
        return self._output_file

    def get_summary(self) -> str:
        """Get a human-readable summary of the trace."""
        lines = [
            f"Game: {self.trace.game_id}",
            f"Seed: {self.trace.seed}",
            f"Rounds played: {len(self.trace.rounds)}",
            "",
            "Round History:",
        ]

        for record in self.trace.rounds:
            kinds = [event["type"] for event in record.events]
            moves = kinds.count("move")
            collisions = kinds.count("collision")
            scores = " ".join(f"P{p.player_id}={p.score}" for p in record.players)
            lines.append(f"  T{record.turn}: {moves} moves, {collisions} collisions | {scores}")

        if self.trace.ending:
            lines.append("")
            lines.append(f"Ending: {self.trace.ending['type']}")
            lines.append(f"  Winners: {self.trace.ending['winners']}")

        lines.append("")
        lines.append(f"Trace saved to: {self._output_file}")

        return "\n".join(lines)
