"""Where the sqlite store keeps its operation records."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "ttlreaper"
DEFAULT_DB_FILENAME: Final[str] = "ttlreaper.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def database_path(self) -> Path:
        data_dir = self.data_dir.expanduser().resolve()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    """Use ``TTLREAPER_DATA_DIR``, else ``$XDG_DATA_HOME/ttlreaper`` (``~/.local/share``)."""

    env_dir = os.getenv("TTLREAPER_DATA_DIR")
    if env_dir:
        return StorageConfig(data_dir=Path(env_dir))
    xdg_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
    return StorageConfig(data_dir=base / APP_DIR_NAME)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
