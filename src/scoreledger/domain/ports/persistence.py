"""Ports for persisting ledger entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from scoreledger.domain.model import Entity, EntityKind


@runtime_checkable
class KeyValueStore(Protocol):
    """Byte-addressed substrate the entity store is layered on.

    Implementations raise ``StoreError`` for substrate failures. The store may
    be shared with unrelated writers; no operation here is transactional across
    calls.
    """

    def has(self, key: bytes) -> bool: ...

    def get(self, key: bytes) -> bytes | None: ...

    def set(self, key: bytes, value: bytes) -> None: ...

    def delete(self, key: bytes) -> None: ...

    def iterate(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Yield ``(key, value)`` pairs whose key starts with ``prefix``, ascending by key."""
        ...


@runtime_checkable
class EntityCodec(Protocol):
    """Turns entities into bytes and back; both directions raise ``CodecError``."""

    def encode(self, entity: Entity) -> bytes: ...

    def decode(self, kind: EntityKind, data: bytes) -> Entity: ...


__all__ = ["EntityCodec", "KeyValueStore"]
