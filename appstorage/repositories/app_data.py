"""Scope roots: where one application (or one user of it) keeps its state.

A root directory holds the settings database and the local folder::

    <root>/settings.db
    <root>/LocalState/...

The current scope lives at ``<data_root>/<app_name>``; a user scope at
``<data_root>/<app_name>/Users/<user>``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional
import logging

from appstorage.core.config import Config, get_config
from appstorage.core.errors import ArgumentError, CollaboratorError
from appstorage.db.session import sqlite_url
from appstorage.repositories.folder_provider import StorageFolder
from appstorage.repositories.settings_container import SettingsContainer, SQLSettingsContainer

logger = logging.getLogger(__name__)


class AppData:
    """One storage root: a settings container plus a local folder."""

    def __init__(self, root: Path | str, config: Optional[Config] = None) -> None:
        if root is None or not str(root).strip():
            raise ArgumentError("root is required")
        config = config or get_config()
        self._root = Path(root)
        folder_path = self._root / config.local_folder_name
        try:
            folder_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CollaboratorError(f"cannot prepare storage root {self._root}: {exc}") from exc
        self._local_settings: SettingsContainer = SQLSettingsContainer(
            sqlite_url(self._root / config.settings_db_name)
        )
        self._local_folder = StorageFolder(folder_path)

    def __repr__(self) -> str:
        return f"AppData({str(self._root)!r})"

    @property
    def root(self) -> Path:
        return self._root

    @property
    def local_settings(self) -> SettingsContainer:
        return self._local_settings

    @property
    def local_folder(self) -> StorageFolder:
        return self._local_folder

    def close(self) -> None:
        """Release the settings database connections of this root."""
        self._local_settings.close()

    @classmethod
    def current(cls, config: Optional[Config] = None) -> "AppData":
        """Root of the running application."""
        config = config or get_config()
        return cls(config.app_root, config)

    @classmethod
    async def for_user(cls, user: str, config: Optional[Config] = None) -> "AppData":
        """Root belonging to *user*; preparing it touches the disk, so this awaits."""
        user_id = (user or "").strip() if isinstance(user, str) else ""
        if not user_id:
            raise ArgumentError("user is required")
        if user_id in (".", "..") or "/" in user_id or "\\" in user_id:
            raise ArgumentError(f"invalid user identifier: {user!r}")
        config = config or get_config()
        root = config.users_root / user_id
        app_data = await asyncio.to_thread(cls, root, config)
        logger.info("Resolved storage root for user %s at %s", user_id, root)
        return app_data
