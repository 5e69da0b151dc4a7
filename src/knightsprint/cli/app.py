"""KnightSprint command-line runner.

Headless driver for the engine: plays seeded games, exports snapshots and
verifies replays. It renders no board; presentation layers consume the
engine's snapshots and events instead.

Examples:
  # One 4-player CPU game on a 10x10 board with obstacles
  knightsprint simulate --seed 42 --board-size 10 --players 4 --cpus 4 --obstacles 6

  # Ten games with consecutive seeds, exported to the snapshot store
  knightsprint simulate --seed 100 --games 10 --cpus 2 --export

  # Check that a stored snapshot replays to the same state
  knightsprint replay seed-42-20260101120000000000
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from knightsprint.cli.trace import TraceLogger
from knightsprint.config import get_log_level, load_game_config
from knightsprint.engine.serialization import replay_snapshot, serialize_state, verify_replay
from knightsprint.engine.setup import resolve_seed
from knightsprint.parameters import DEFAULT_STRATEGY
from knightsprint.storage import get_snapshot_repository
from knightsprint.strategies import create_default_registry
from knightsprint.testing.game_runner import GameRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="knightsprint",
        description="Deterministic simultaneous-turn knight game runner.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Built-in strategies:
  - mobility: keep the most onward moves open
  - aggressor: cut opponents' moves without self-crippling
  - balanced: blend of both, shifting to blocking as the board fills
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    simulate = subparsers.add_parser("simulate", help="Play headless games")
    simulate.add_argument("--seed", type=int, default=None, help="Seed of the first game")
    simulate.add_argument("--games", type=int, default=1, help="Number of games (seeds increment)")
    simulate.add_argument("--board-size", type=int, default=None)
    simulate.add_argument("--players", type=int, default=None, help="Knights on the board (2-4)")
    simulate.add_argument("--cpus", type=int, default=None, help="CPU-controlled knights")
    simulate.add_argument("--obstacles", type=int, default=None, help="Requested obstacle count")
    simulate.add_argument("--strategy", default=None, help="Strategy for CPU seats")
    simulate.add_argument(
        "--human-strategy",
        default=DEFAULT_STRATEGY,
        help="Strategy that plays the human seats (default: mobility)",
    )
    simulate.add_argument("--max-rounds", type=int, default=None)
    simulate.add_argument("--export", action="store_true", help="Save final snapshots")
    simulate.add_argument("--snapshots-path", type=Path, default=None)
    simulate.add_argument("--trace-dir", type=Path, default=None, help="Write per-game trace files")

    replay = subparsers.add_parser("replay", help="Replay a snapshot and verify it")
    replay.add_argument("source", help="Snapshot JSON file or stored snapshot id")
    replay.add_argument("--snapshots-path", type=Path, default=None)

    subparsers.add_parser("strategies", help="List registered strategies")
    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, get_log_level(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def run_simulate(args: argparse.Namespace) -> int:
    registry = create_default_registry()
    first_seed = resolve_seed(args.seed)
    repo = get_snapshot_repository(args.snapshots_path) if args.export else None

    summaries = []
    for offset in range(args.games):
        config = load_game_config(
            seed=first_seed + offset,
            board_size=args.board_size,
            player_count=args.players,
            cpu_count=args.cpus,
            obstacle_count=args.obstacles,
            ai_strategy=args.strategy,
        )
        runner = GameRunner(
            config,
            registry=registry,
            human_strategy=args.human_strategy,
            max_rounds=args.max_rounds,
        )
        result = asyncio.run(runner.run_game())
        summary = result.to_dict()

        if args.trace_dir is not None:
            trace = TraceLogger(
                seed=result.seed,
                board_size=result.board_size,
                strategies=result.strategies,
                output_dir=args.trace_dir,
            )
            for round_result in runner.rounds:
                trace.record_round(round_result)
            trace.record_ending(result.ending, result.winners, result.scores)
            summary["trace"] = str(trace.output_file)

        if repo is not None:
            summary["snapshot_id"] = repo.save_snapshot(result.snapshot)
            logger.info(f"Exported snapshot {summary['snapshot_id']}")

        summaries.append(summary)

    print(json.dumps(summaries, indent=2))
    return 0


def load_snapshot_source(source: str, snapshots_path: Optional[Path]) -> dict:
    """Load a snapshot from a file path or from the snapshot store.

    Raises:
        ValueError: If the source is neither a readable file nor a stored id
    """
    path = Path(source)
    if path.is_file():
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        # Accept both bare snapshots and repository files.
        return data.get("snapshot", data)

    snapshot = get_snapshot_repository(snapshots_path).get_snapshot(source)
    if snapshot is None:
        raise ValueError(f"Snapshot not found: {source}")
    return snapshot


def run_replay(args: argparse.Namespace) -> int:
    snapshot = load_snapshot_source(args.source, args.snapshots_path)
    final = replay_snapshot(snapshot)
    matches = verify_replay(snapshot)
    report = {
        "matches": matches,
        "seed": final.seed,
        "turn": final.turn,
        "phase": final.phase.value,
        "winners": [p.id for p in final.winners()],
    }
    if not matches:
        report["replayed"] = serialize_state(final)
    print(json.dumps(report, indent=2))
    return 0 if matches else 1


def run_strategies(args: argparse.Namespace) -> int:
    for name in create_default_registry().list_registered_names():
        print(name)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    handlers = {
        "simulate": run_simulate,
        "replay": run_replay,
        "strategies": run_strategies,
    }
    try:
        return handlers[args.command](args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
