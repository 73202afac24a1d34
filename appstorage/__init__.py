"""Application-local settings and object storage.

Typical use::

    from appstorage import for_current_scope

    helper = for_current_scope()
    helper.write("theme", "dark")
    helper.write_composite("window", {"width": 900, "height": 600})
    await helper.create_file("cache/devices.json", devices)
"""

from appstorage.core.errors import (
    ArgumentError,
    CollaboratorError,
    FormatError,
    NotFoundError,
    StorageError,
)
from appstorage.core.serializers import JsonObjectSerializer, ObjectSerializer, default_serializer
from appstorage.domain.values import CompositeValue, CreationCollisionOption, FolderEntry, ItemKind, Scalar
from appstorage.repositories.app_data import AppData
from appstorage.services.storage_helper import (
    ApplicationDataStorageHelper,
    for_current_scope,
    for_user_scope,
)

__all__ = [
    "AppData",
    "ApplicationDataStorageHelper",
    "ArgumentError",
    "CollaboratorError",
    "CompositeValue",
    "CreationCollisionOption",
    "FolderEntry",
    "FormatError",
    "ItemKind",
    "JsonObjectSerializer",
    "NotFoundError",
    "ObjectSerializer",
    "Scalar",
    "StorageError",
    "default_serializer",
    "for_current_scope",
    "for_user_scope",
]
