"""Key-value substrate backed by a single SQLAlchemy table.

Every operation runs in its own transaction, so a write is durable as soon as
the call returns.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from scoreledger.domain.errors import StoreError

from .mappings import kv_table

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

    from scoreledger.domain.ports import KeyValueStore


def prefix_upper_bound(prefix: bytes) -> bytes | None:
    """Return the smallest key greater than every key starting with ``prefix``."""

    stripped = prefix.rstrip(b"\xff")
    if not stripped:
        return None
    return stripped[:-1] + bytes([stripped[-1] + 1])


@contextmanager
def _store_errors(action: str, key: bytes) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to {action} key {key!r}: {exc}") from exc


class SqlAlchemyKeyValueStore:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def has(self, key: bytes) -> bool:
        with _store_errors("check", key), self.engine.connect() as connection:
            stmt = select(kv_table.c.key).where(kv_table.c.key == key)
            return connection.execute(stmt).first() is not None

    def get(self, key: bytes) -> bytes | None:
        with _store_errors("read", key), self.engine.connect() as connection:
            stmt = select(kv_table.c.value).where(kv_table.c.key == key)
            value = connection.execute(stmt).scalar_one_or_none()
        return bytes(value) if value is not None else None

    def set(self, key: bytes, value: bytes) -> None:
        with _store_errors("write", key), self.engine.begin() as connection:
            updated = connection.execute(
                update(kv_table).where(kv_table.c.key == key).values(value=value)
            )
            if updated.rowcount == 0:
                connection.execute(insert(kv_table).values(key=key, value=value))

    def delete(self, key: bytes) -> None:
        with _store_errors("delete", key), self.engine.begin() as connection:
            connection.execute(delete(kv_table).where(kv_table.c.key == key))

    def iterate(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        stmt = select(kv_table.c.key, kv_table.c.value).where(kv_table.c.key >= prefix)
        upper = prefix_upper_bound(prefix)
        if upper is not None:
            stmt = stmt.where(kv_table.c.key < upper)
        stmt = stmt.order_by(kv_table.c.key)

        # materialised so callers can write while consuming the scan
        with _store_errors("scan", prefix), self.engine.connect() as connection:
            rows = connection.execute(stmt).all()
        for key, value in rows:
            yield bytes(key), bytes(value)


if TYPE_CHECKING:
    _kv_check: KeyValueStore = SqlAlchemyKeyValueStore(engine=None)  # type: ignore[arg-type]
