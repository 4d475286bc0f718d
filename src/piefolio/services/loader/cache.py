"""Caller-owned snapshot cache with a freshness window."""

import json
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Union

from pydantic import ValidationError

from ...config.logging import get_logger
from ...utils.files import write_text_atomic
from ..snapshot.models import Snapshot

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60


@dataclass
class CachedSnapshot:
    """A snapshot together with the time it was stored (epoch seconds)."""

    snapshot: Snapshot
    stored_at: float


class SnapshotCache:
    """
    Holds the last fetched snapshot so repeated loads skip the fetch.

    An entry is served only while it is younger than the TTL and its baseline
    date equals the rolling baseline the caller expects for today. A baseline
    mismatch means the snapshot was produced for a different window, so the
    entry is dropped. When ``path`` is given the entry is also kept on disk
    and survives restarts.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        path: Optional[Union[str, Path]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.path = Path(path) if path else None
        self.clock = clock
        self._entry: Optional[CachedSnapshot] = None
        self.logger = logger.bind(component="snapshot_cache")

    def get(self, expected_baseline: date) -> Optional[Snapshot]:
        """
        Get the cached snapshot if it is still usable.

        Args:
            expected_baseline: Rolling baseline date for the current day

        Returns:
            The cached Snapshot, or None on a miss
        """
        entry = self._entry or self._read()
        if entry is None:
            self.logger.debug("Snapshot cache miss", reason="empty")
            return None

        age = self.clock() - entry.stored_at
        if age >= self.ttl_seconds:
            self.logger.debug("Snapshot cache miss", reason="expired", age=age)
            return None

        cached_baseline = entry.snapshot.metadata.baseline_date
        if cached_baseline != expected_baseline:
            self.logger.info(
                "Invalidating cached snapshot with stale baseline",
                cached_baseline=cached_baseline.isoformat(),
                expected_baseline=expected_baseline.isoformat(),
            )
            self.clear()
            return None

        self._entry = entry
        self.logger.debug("Snapshot cache hit", age=age)
        return entry.snapshot

    def store(self, snapshot: Snapshot) -> None:
        """Replace the cached entry with ``snapshot``, stamped now."""
        self._entry = CachedSnapshot(snapshot=snapshot, stored_at=self.clock())
        self._write(self._entry)

    def clear(self) -> None:
        """Drop the cached entry from memory and disk."""
        self._entry = None
        if self.path is not None:
            self.path.unlink(missing_ok=True)

    def _read(self) -> Optional[CachedSnapshot]:
        if self.path is None or not self.path.exists():
            return None

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return CachedSnapshot(
                snapshot=Snapshot.model_validate(payload["snapshot"]),
                stored_at=float(payload["storedAt"]),
            )
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as e:
            self.logger.warning(
                "Discarding unreadable snapshot cache",
                path=str(self.path),
                error=str(e),
            )
            self.clear()
            return None

    def _write(self, entry: CachedSnapshot) -> None:
        if self.path is None:
            return

        payload = {
            "storedAt": entry.stored_at,
            "snapshot": entry.snapshot.model_dump(
                mode="json", by_alias=True, exclude_none=True
            ),
        }

        try:
            write_text_atomic(self.path, json.dumps(payload))
        except OSError as e:
            # The in-memory entry still serves this process
            self.logger.warning(
                "Could not persist snapshot cache", path=str(self.path), error=str(e)
            )
