"""Lifecycle of the SQLAlchemy engine behind the key-value substrate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from scoreledger.config.storage import get_storage_config

from .kv_store import SqlAlchemyKeyValueStore
from .mappings import create_all_tables

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Initialise the SQLAlchemy engine and make sure the tables exist."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_storage_config().database_uri, future=True
    )
    create_all_tables(resolved_engine)
    _STATE.engine = resolved_engine
    return resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


def open_kv_store() -> SqlAlchemyKeyValueStore:
    """Return a key-value store bound to the managed engine."""

    if _STATE.engine is None:
        raise StartupError(
            "SQLAlchemy adapter not initialised. Call scoreledger.adapters.sqlalchemy."
            "engine.startup() before opening the store."
        )
    return SqlAlchemyKeyValueStore(_STATE.engine)
