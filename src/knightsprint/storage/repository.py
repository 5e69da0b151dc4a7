"""Abstract repository interface for exported KnightSprint snapshots.

Snapshots are the only thing KnightSprint persists: a finished or paused
game exported for replay and inspection.
"""

from abc import ABC, abstractmethod
from typing import Optional


class SnapshotRepository(ABC):
    """Abstract base class for snapshot storage."""

    @abstractmethod
    def save_snapshot(self, snapshot: dict) -> str:
        """Persist a snapshot, return its ID.

        Args:
            snapshot: Snapshot dict as produced by serialize_state()

        Returns:
            ID of the saved snapshot

        Raises:
            ValueError: If the snapshot lacks a 'seed' field
        """
        pass

    @abstractmethod
    def get_snapshot(self, snapshot_id: str) -> Optional[dict]:
        """Load a snapshot by ID.

        Returns:
            Snapshot dict, or None if not found
        """
        pass

    @abstractmethod
    def list_snapshots(self) -> list[dict]:
        """Return metadata for all stored snapshots.

        Returns:
            List of dicts containing: {id, seed, board_size, turn, phase, saved_at}
        """
        pass

    @abstractmethod
    def delete_snapshot(self, snapshot_id: str) -> bool:
        """Delete a snapshot.

        Returns:
            True if deleted, False if not found
        """
        pass
