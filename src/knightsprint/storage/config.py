"""Storage configuration for KnightSprint.

Factory for the snapshot repository, reading its location from the
environment (see knightsprint.config).
"""

from pathlib import Path
from typing import Optional

from knightsprint.config import get_snapshots_path

from .file_repo import FileSnapshotRepository
from .repository import SnapshotRepository


def get_snapshot_repository(path: Optional[str | Path] = None) -> SnapshotRepository:
    """Factory function to create the snapshot repository.

    Args:
        path: Snapshot directory. If None, uses KNIGHTSPRINT_SNAPSHOTS_PATH.

    Returns:
        SnapshotRepository instance
    """
    if path is None:
        path = get_snapshots_path()
    return FileSnapshotRepository(path)
