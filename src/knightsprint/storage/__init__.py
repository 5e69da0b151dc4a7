"""Storage module for KnightSprint.

Exported game snapshots are stored as JSON files.

Usage:
    from knightsprint.storage import get_snapshot_repository

    repo = get_snapshot_repository()
    snapshot_id = repo.save_snapshot(serialize_state(state))
    snapshot = repo.get_snapshot(snapshot_id)

Configuration via environment variables:
    KNIGHTSPRINT_SNAPSHOTS_PATH: Path to snapshots directory (default: "snapshots")
"""

from .config import get_snapshot_repository
from .file_repo import FileSnapshotRepository
from .repository import SnapshotRepository

__all__ = [
    "SnapshotRepository",
    "FileSnapshotRepository",
    "get_snapshot_repository",
]
