"""File-based snapshot repository using JSON files.

Each snapshot is stored as ``<id>.json`` wrapping the snapshot with its
metadata, so the snapshot itself comes back byte-for-byte as exported.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .repository import SnapshotRepository


class FileSnapshotRepository(SnapshotRepository):
    """JSON file-based snapshot repository.

    Snapshot IDs are ``seed-<seed>-<UTC timestamp>``.
    """

    def __init__(self, snapshots_path: str | Path = "snapshots"):
        """Initialize repository.

        Args:
            snapshots_path: Path to snapshots directory
        """
        self.snapshots_path = Path(snapshots_path)
        self.snapshots_path.mkdir(parents=True, exist_ok=True)

    def _get_snapshot_path(self, snapshot_id: str) -> Path:
        return self.snapshots_path / f"{snapshot_id}.json"

    def save_snapshot(self, snapshot: dict) -> str:
        """Save snapshot, return ID."""
        if "seed" not in snapshot:
            raise ValueError("Snapshot must have a 'seed' field")

        now = datetime.now(timezone.utc)
        snapshot_id = f"seed-{snapshot['seed']}-{now.strftime('%Y%m%d%H%M%S%f')}"
        payload = {
            "id": snapshot_id,
            "saved_at": now.isoformat(),
            "snapshot": snapshot,
        }

        with open(self._get_snapshot_path(snapshot_id), "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

        return snapshot_id

    def get_snapshot(self, snapshot_id: str) -> Optional[dict]:
        """Load snapshot by ID."""
        path = self._get_snapshot_path(snapshot_id)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            return json.load(f)["snapshot"]

    def list_snapshots(self) -> list[dict]:
        """Return metadata for all stored snapshots, newest first."""
        snapshots = []
        for path in self.snapshots_path.glob("*.json"):
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            snapshot = data.get("snapshot", {})
            snapshots.append({
                "id": data.get("id", path.stem),
                "seed": snapshot.get("seed"),
                "board_size": snapshot.get("boardSize"),
                "turn": snapshot.get("turn", 0),
                "phase": snapshot.get("phase", ""),
                "saved_at": data.get("saved_at", ""),
            })
        return sorted(snapshots, key=lambda x: x["saved_at"], reverse=True)

    def delete_snapshot(self, snapshot_id: str) -> bool:
        """Delete snapshot."""
        path = self._get_snapshot_path(snapshot_id)
        if path.exists():
            path.unlink()
            return True
        return False
