"""Serialized objects kept as text files under a root folder."""

from __future__ import annotations

from typing import Any
import logging

from appstorage.core.errors import ArgumentError
from appstorage.core.serializers import ObjectSerializer
from appstorage.domain.values import CreationCollisionOption, FolderEntry, ItemKind
from appstorage.repositories.folder_provider import StorageFile, StorageFolder, StorageItem
from appstorage.services.settings_store import target_type

logger = logging.getLogger(__name__)


def item_kind(item: StorageItem) -> ItemKind:
    if item.is_file:
        return ItemKind.FILE
    if item.is_folder:
        return ItemKind.FOLDER
    return ItemKind.NONE


class FileStore:
    """Async file operations relative to one root folder."""

    def __init__(self, folder: StorageFolder, serializer: ObjectSerializer) -> None:
        if folder is None:
            raise ArgumentError("folder is required")
        if serializer is None:
            raise ArgumentError("serializer is required")
        self.folder = folder
        self.serializer = serializer

    async def item_exists(self, item_path: str) -> bool:
        return await self.folder.try_get_item(item_path) is not None

    async def file_exists(self, file_path: str, recursive: bool = False) -> bool:
        """True when a file (not a folder) exists at *file_path*.

        With *recursive*, the same relative path is also looked for below every
        subfolder.
        """
        return await self.folder.file_exists(file_path, recursive)

    async def read_file(self, file_path: str, default: Any = None, *, type_: Any = None) -> Any:
        """Decode the file at *file_path*; *default* when there is no such item."""
        text = await self.folder.read_text(file_path)
        if text is None:
            return default
        return self.serializer.deserialize(text, target_type(type_, default))

    async def read_folder(self, folder_path: str = "") -> list[FolderEntry]:
        """List the immediate children of *folder_path* (the root when empty)."""
        target = await self.folder.get_folder(folder_path)
        items = await target.get_items()
        return [FolderEntry(item_kind(item), item.name) for item in items]

    async def create_file(self, file_path: str, value: Any) -> StorageFile:
        """Serialize *value* into *file_path*, replacing any existing file."""
        text = self.serializer.serialize(value)
        stored = await self.folder.create_file(file_path, text, CreationCollisionOption.REPLACE_EXISTING)
        logger.debug("Saved object to %s", file_path)
        return stored

    async def create_folder(self, folder_path: str) -> StorageFolder:
        """Create *folder_path*; an existing folder is left as it is."""
        return await self.folder.create_folder(folder_path, CreationCollisionOption.OPEN_IF_EXISTS)

    async def delete_item(self, item_path: str) -> None:
        """Delete the file or folder at *item_path*; NotFoundError when absent."""
        item = await self.folder.get_item(item_path)
        await item.delete()
        logger.debug("Deleted item %s", item_path)
