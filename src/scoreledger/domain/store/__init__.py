"""Entity store layered on a key-value substrate."""

from __future__ import annotations

from .entity_store import EntityStore
from .keys import StoreConfig, decode_id, encode_id, entity_key

__all__ = [
    "EntityStore",
    "StoreConfig",
    "decode_id",
    "encode_id",
    "entity_key",
]
