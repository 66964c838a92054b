"""
Daily Snapshot Source

Read-only access to stored daily market snapshots. The document store
that backs production lives outside this package; the in-memory source
serves local runs, the JSON dump loader and tests.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from nepse_analyzer.core.config import settings
from nepse_analyzer.schemas.market import DailySnapshot
from nepse_analyzer.services.data_ingestion.extractor import normalize_symbol

logger = logging.getLogger(__name__)


class SnapshotSource(ABC):
    """Contract for anything that can serve daily snapshots."""

    @abstractmethod
    async def get_history(self, symbol: str, limit: int) -> list[DailySnapshot]:
        """
        Most recent ``limit`` snapshots that contain ``symbol``.

        Returned oldest-first.
        """
        pass

    @abstractmethod
    async def get_latest(self) -> Optional[DailySnapshot]:
        """Most recent snapshot, or None when nothing is stored."""
        pass


class InMemorySnapshotSource(SnapshotSource):
    """Snapshots held in a date-sorted list."""

    def __init__(self, snapshots: Iterable[DailySnapshot] = ()):
        self._snapshots = sorted(snapshots, key=lambda s: s.date)

    def __len__(self) -> int:
        return len(self._snapshots)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemorySnapshotSource":
        """Load a JSON array of snapshots (``{"date", "stocks": [...]}``)."""
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        snapshots = [DailySnapshot.model_validate(item) for item in raw]
        logger.info(f"Loaded {len(snapshots)} daily snapshots from {path}")
        return cls(snapshots)

    def add(self, snapshot: DailySnapshot) -> None:
        """Insert or replace the snapshot for its date."""
        self._snapshots = [s for s in self._snapshots if s.date != snapshot.date]
        self._snapshots.append(snapshot)
        self._snapshots.sort(key=lambda s: s.date)

    async def get_history(self, symbol: str, limit: int) -> list[DailySnapshot]:
        target = normalize_symbol(symbol)
        matching = [s for s in self._snapshots if s.find(target) is not None]
        return matching[-limit:] if limit > 0 else []

    async def get_latest(self) -> Optional[DailySnapshot]:
        return self._snapshots[-1] if self._snapshots else None


# Singleton instance
_source_instance: Optional[SnapshotSource] = None


def get_snapshot_source() -> SnapshotSource:
    """Get or create the configured snapshot source."""
    global _source_instance
    if _source_instance is None:
        if settings.snapshot_file:
            _source_instance = InMemorySnapshotSource.from_json_file(settings.snapshot_file)
        else:
            logger.warning("No snapshot_file configured, starting with an empty source")
            _source_instance = InMemorySnapshotSource()
    return _source_instance


def set_snapshot_source(source: Optional[SnapshotSource]) -> None:
    """Replace the process-wide snapshot source (None resets it)."""
    global _source_instance
    _source_instance = source
