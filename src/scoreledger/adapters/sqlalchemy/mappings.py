"""SQLAlchemy table metadata for the key-value substrate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import Column, LargeBinary, MetaData, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData()

kv_table = Table(
    "kv_entries",
    metadata,
    Column("key", LargeBinary, primary_key=True),
    Column("value", LargeBinary, nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the key-value substrate."""

    log.info("Creating all tables")
    metadata.create_all(engine)
