"""
Persistence adapters.

These modules encapsulate where data physically lives: the settings container
(SQL table per scope), the folder provider (local filesystem) and the scope
roots tying both together. Stores depend on the container/folder interfaces
rather than touching the database or the disk.
"""

from .app_data import AppData
from .folder_provider import StorageFile, StorageFolder, StorageItem
from .settings_container import SettingsContainer, SQLSettingsContainer

__all__ = ["AppData", "SQLSettingsContainer", "SettingsContainer", "StorageFile", "StorageFolder", "StorageItem"]
