"""Exceptions raised by appstorage.

Defaults are only ever returned for a key or item that is absent. Anything that
is present but unusable, or any failure of the underlying database or
filesystem, surfaces as one of these.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base class for appstorage exceptions."""


class ArgumentError(StorageError, ValueError):
    """A required argument is missing or invalid (empty key, path outside the root)."""


class FormatError(StorageError, ValueError):
    """A stored string is not a valid encoding of the requested type, or a value cannot be encoded."""


class NotFoundError(StorageError, LookupError):
    """The operation requires an item that does not exist."""


class CollaboratorError(StorageError):
    """The settings database or the filesystem failed.

    The original exception is kept as ``__cause__``.
    """
