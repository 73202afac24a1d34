"""Domain types shared by containers, stores and the facade."""

from .values import CompositeValue, CreationCollisionOption, FolderEntry, ItemKind, Scalar, StoredValue

__all__ = ["CompositeValue", "CreationCollisionOption", "FolderEntry", "ItemKind", "Scalar", "StoredValue"]
