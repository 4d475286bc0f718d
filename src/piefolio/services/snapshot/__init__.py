"""Snapshot builder service module."""

from .builder import SnapshotBuilder
from .models import FailedTicker, Snapshot, SnapshotMetadata, TickerReturn

__all__ = [
    "FailedTicker",
    "Snapshot",
    "SnapshotBuilder",
    "SnapshotMetadata",
    "TickerReturn",
]
