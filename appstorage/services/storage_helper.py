"""
Storage helper bound to one scope root.

Settings calls are synchronous. File calls and user scope resolution are
coroutines because they wait on the disk.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple
import logging

from appstorage.core.errors import ArgumentError
from appstorage.core.serializers import ObjectSerializer, default_serializer
from appstorage.domain.values import FolderEntry
from appstorage.repositories.app_data import AppData
from appstorage.repositories.folder_provider import StorageFile, StorageFolder
from appstorage.repositories.settings_container import SettingsContainer
from appstorage.services.file_store import FileStore
from appstorage.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


class ApplicationDataStorageHelper:
    """Settings and files of one ``AppData`` root, encoded with one serializer.

    The helper holds no values of its own; two helpers over the same root see
    each other's writes.
    """

    def __init__(self, app_data: AppData, serializer: ObjectSerializer) -> None:
        if app_data is None:
            raise ArgumentError("app_data is required")
        if serializer is None:
            raise ArgumentError("serializer is required")
        self._app_data = app_data
        self._serializer = serializer
        self._settings_store = SettingsStore(app_data.local_settings, serializer)
        self._file_store = FileStore(app_data.local_folder, serializer)

    @classmethod
    def with_default_serializer(cls, app_data: AppData) -> "ApplicationDataStorageHelper":
        return cls(app_data, default_serializer())

    def __repr__(self) -> str:
        return f"ApplicationDataStorageHelper({self._app_data!r}, {type(self._serializer).__name__})"

    def close(self) -> None:
        self._app_data.close()

    @property
    def app_data(self) -> AppData:
        return self._app_data

    @property
    def settings(self) -> SettingsContainer:
        return self._app_data.local_settings

    @property
    def folder(self) -> StorageFolder:
        return self._app_data.local_folder

    @property
    def serializer(self) -> ObjectSerializer:
        return self._serializer

    # -------------------------------- settings --------------------------------
    def exists(self, key: str) -> bool:
        return self._settings_store.exists(key)

    def keys(self) -> list[str]:
        return self._settings_store.keys()

    def read(self, key: str, default: Any = None, *, type_: Any = None) -> Any:
        return self._settings_store.read(key, default, type_=type_)

    def try_read(self, key: str, *, type_: Any = None) -> Tuple[bool, Any]:
        return self._settings_store.try_read(key, type_=type_)

    def write(self, key: str, value: Any) -> None:
        self._settings_store.write(key, value)

    def delete(self, key: str) -> bool:
        return self._settings_store.delete(key)

    def clear(self) -> None:
        self._settings_store.clear()

    def exists_composite(self, composite_key: str, key: str) -> bool:
        return self._settings_store.exists_composite(composite_key, key)

    def read_composite(self, composite_key: str, key: str, default: Any = None, *, type_: Any = None) -> Any:
        return self._settings_store.read_composite(composite_key, key, default, type_=type_)

    def try_read_composite(self, composite_key: str, key: str, *, type_: Any = None) -> Tuple[bool, Any]:
        return self._settings_store.try_read_composite(composite_key, key, type_=type_)

    def read_composite_values(self, composite_key: str, *, type_: Any = None) -> Optional[dict[str, Any]]:
        return self._settings_store.read_composite_values(composite_key, type_=type_)

    def write_composite(self, composite_key: str, values: Mapping[str, Any]) -> None:
        self._settings_store.write_composite(composite_key, values)

    def delete_composite(self, composite_key: str, key: str) -> bool:
        return self._settings_store.delete_composite(composite_key, key)

    # --------------------------------- files ----------------------------------
    async def item_exists(self, item_path: str) -> bool:
        return await self._file_store.item_exists(item_path)

    async def file_exists(self, file_path: str, recursive: bool = False) -> bool:
        return await self._file_store.file_exists(file_path, recursive)

    async def read_file(self, file_path: str, default: Any = None, *, type_: Any = None) -> Any:
        return await self._file_store.read_file(file_path, default, type_=type_)

    async def read_folder(self, folder_path: str = "") -> list[FolderEntry]:
        return await self._file_store.read_folder(folder_path)

    async def create_file(self, file_path: str, value: Any) -> StorageFile:
        return await self._file_store.create_file(file_path, value)

    async def create_folder(self, folder_path: str) -> StorageFolder:
        return await self._file_store.create_folder(folder_path)

    async def delete_item(self, item_path: str) -> None:
        await self._file_store.delete_item(item_path)


def for_current_scope(serializer: Optional[ObjectSerializer] = None) -> ApplicationDataStorageHelper:
    """Helper over the running application's root."""
    if serializer is None:
        serializer = default_serializer()
    return ApplicationDataStorageHelper(AppData.current(), serializer)


async def for_user_scope(user: str, serializer: Optional[ObjectSerializer] = None) -> ApplicationDataStorageHelper:
    """Helper over *user*'s root, resolved asynchronously."""
    app_data = await AppData.for_user(user)
    logger.debug("Storage helper ready for user %s", user)
    if serializer is None:
        serializer = default_serializer()
    return ApplicationDataStorageHelper(app_data, serializer)
