"""SQLAlchemy adapter package for scoreledger."""

from __future__ import annotations

from .engine import (
    StartupError,
    configured_engine,
    is_started,
    open_kv_store,
    shutdown,
    startup,
)
from .kv_store import SqlAlchemyKeyValueStore, prefix_upper_bound
from .mappings import create_all_tables, kv_table, metadata

__all__ = [
    "SqlAlchemyKeyValueStore",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "kv_table",
    "metadata",
    "open_kv_store",
    "prefix_upper_bound",
    "shutdown",
    "startup",
]
