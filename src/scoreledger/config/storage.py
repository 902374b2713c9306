"""Where scoreledger keeps its database and HTTP cache."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "scoreledger"
DATABASE_FILENAME: Final[str] = "ledger.db"
HTTP_CACHE_FILENAME: Final[str] = "feed_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_uri_override: str | None = None

    def ensure_data_dir(self) -> Path:
        path = self.data_dir.expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def database_uri(self) -> str:
        if self.database_uri_override:
            return self.database_uri_override
        return f"sqlite+pysqlite:///{self.ensure_data_dir() / DATABASE_FILENAME}"

    @property
    def http_cache_path(self) -> Path:
        return self.ensure_data_dir() / HTTP_CACHE_FILENAME


def default_data_dir() -> Path:
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


def get_storage_config() -> StorageConfig:
    """Read ``SCORELEDGER_DATA_DIR`` and ``DATABASE_URI``; neither is required."""

    data_dir = optional_env_var("SCORELEDGER_DATA_DIR", "")
    database_uri = optional_env_var("DATABASE_URI", "")
    return StorageConfig(
        data_dir=Path(data_dir) if data_dir else default_data_dir(),
        database_uri_override=database_uri or None,
    )
