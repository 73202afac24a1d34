"""
High-level storage use cases.

The settings store and file store layer serialization and the absent/default
rules on top of the repositories; the storage helper binds both to one scope
root and one serializer.
"""

from .file_store import FileStore
from .settings_store import SettingsStore
from .storage_helper import ApplicationDataStorageHelper, for_current_scope, for_user_scope

__all__ = ["ApplicationDataStorageHelper", "FileStore", "SettingsStore", "for_current_scope", "for_user_scope"]
