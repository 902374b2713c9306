"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import FetchRequest, SnapshotFetcher
from .persistence import EntityCodec, KeyValueStore

__all__ = [
    "EntityCodec",
    "FetchRequest",
    "KeyValueStore",
    "SnapshotFetcher",
]
