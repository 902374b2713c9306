from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from scoreledger.adapters.codec import JsonEntityCodec
from scoreledger.adapters.memory import InMemoryKeyValueStore
from scoreledger.adapters.sqlalchemy import create_all_tables, shutdown
from scoreledger.domain.store import EntityStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def memory_kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def entity_store(memory_kv: InMemoryKeyValueStore) -> EntityStore:
    return EntityStore(kv=memory_kv, codec=JsonEntityCodec())


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def _reset_sqlalchemy_adapter() -> Iterator[None]:
    yield
    shutdown()
