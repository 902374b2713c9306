"""Key derivation for the entity store.

A key is the kind prefix followed by the entity id as an unsigned 64-bit
big-endian integer, so a prefix scan walks ids in ascending order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from scoreledger.domain.errors import StoreError
from scoreledger.domain.model import EntityKind

if TYPE_CHECKING:
    from collections.abc import Mapping

ID_BYTES = 8
_MAX_ID = 2 ** (8 * ID_BYTES) - 1


def _default_prefixes() -> Mapping[EntityKind, bytes]:
    return MappingProxyType({kind: kind.value.encode("ascii") for kind in EntityKind})


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Key layout of the entity store, fixed at construction time."""

    prefixes: Mapping[EntityKind, bytes] = field(default_factory=_default_prefixes)

    def __post_init__(self) -> None:
        missing = [kind for kind in EntityKind if not self.prefixes.get(kind)]
        if missing:
            names = ", ".join(sorted(kind.value for kind in missing))
            raise ValueError(f"Missing key prefix for: {names}")
        if len(set(self.prefixes.values())) != len(self.prefixes):
            raise ValueError("Key prefixes must be distinct per entity kind")

    def prefix(self, kind: EntityKind) -> bytes:
        return self.prefixes[kind]

    def key(self, kind: EntityKind, entity_id: int) -> bytes:
        return entity_key(self.prefix(kind), entity_id)


def encode_id(entity_id: int) -> bytes:
    if not 0 <= entity_id <= _MAX_ID:
        raise StoreError(f"Entity id out of key range: {entity_id}")
    return entity_id.to_bytes(ID_BYTES, "big")


def decode_id(data: bytes) -> int:
    if len(data) != ID_BYTES:
        raise ValueError(f"Expected {ID_BYTES} bytes, got {len(data)}")
    return int.from_bytes(data, "big")


def entity_key(prefix: bytes, entity_id: int) -> bytes:
    return prefix + encode_id(entity_id)
