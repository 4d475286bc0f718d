"""Presentation loader service module."""

from .cache import CachedSnapshot, SnapshotCache
from .loader import PresentationLoader
from .sources import fetch_json

__all__ = ["CachedSnapshot", "PresentationLoader", "SnapshotCache", "fetch_json"]
