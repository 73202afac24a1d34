"""
Configuration helpers for appstorage.

Every tunable (data root, application name, folder layout, logging) is read
from environment variables here so that stores and adapters never touch
os.environ directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os


@dataclass(frozen=True)
class Config:
    """Typed view of environment variables."""

    app_name: str
    data_root: Path
    settings_db_name: str
    local_folder_name: str
    users_folder_name: str
    log_level: str
    sql_echo: bool

    @property
    def app_root(self) -> Path:
        """Root of the "current" scope: <data_root>/<app_name>."""
        return self.data_root / self.app_name

    @property
    def users_root(self) -> Path:
        return self.app_root / self.users_folder_name


def _default_data_root() -> Path:
    if os.name == "nt":  # Windows
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        return Path(base) if base else Path.home() / "AppData" / "Local"
    base = os.environ.get("XDG_DATA_HOME")
    return Path(base) if base else Path.home() / ".local" / "share"


@lru_cache
def get_config() -> Config:
    """Read the current environment and build a Config instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _name(value: str | None, default: str) -> str:
        value = (value or "").strip()
        return value or default

    data_root = (os.getenv("APPSTORAGE_DATA_ROOT") or "").strip()

    return Config(
        app_name=_name(os.getenv("APPSTORAGE_APP_NAME"), "appstorage"),
        data_root=Path(data_root).expanduser() if data_root else _default_data_root(),
        settings_db_name=_name(os.getenv("APPSTORAGE_SETTINGS_DB"), "settings.db"),
        local_folder_name=_name(os.getenv("APPSTORAGE_LOCAL_FOLDER"), "LocalState"),
        users_folder_name=_name(os.getenv("APPSTORAGE_USERS_FOLDER"), "Users"),
        log_level=_name(os.getenv("APPSTORAGE_LOG_LEVEL"), "WARNING").upper(),
        sql_echo=_bool(os.getenv("APPSTORAGE_SQL_ECHO"), False),
    )
