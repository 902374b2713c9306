"""In-memory key-value substrate, used for dry runs and tests."""

from __future__ import annotations

from bisect import bisect_left, insort
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from scoreledger.domain.ports import KeyValueStore


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}
        self._keys: list[bytes] = []

    def has(self, key: bytes) -> bool:
        return key in self._data

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        if key not in self._data:
            insort(self._keys, key)
        self._data[key] = bytes(value)

    def delete(self, key: bytes) -> None:
        if self._data.pop(key, None) is None:
            return
        self._keys.pop(bisect_left(self._keys, key))

    def iterate(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        start = bisect_left(self._keys, prefix)
        # snapshot so callers may write while scanning
        for key in self._keys[start:]:
            if not key.startswith(prefix):
                break
            value = self._data.get(key)
            if value is not None:
                yield key, value

    def __len__(self) -> int:
        return len(self._data)


if TYPE_CHECKING:
    _kv_check: KeyValueStore = InMemoryKeyValueStore()
