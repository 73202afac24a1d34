"""
Typed settings on top of a settings container.

Top-level keys hold either a scalar (one serialized value) or a composite (a
group of serialized sub-values written and read as one entry).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple
import logging

from appstorage.core.errors import ArgumentError, FormatError
from appstorage.core.serializers import ObjectSerializer
from appstorage.domain.values import CompositeValue, Scalar
from appstorage.repositories.settings_container import SettingsContainer

logger = logging.getLogger(__name__)


def _require_key(value: str, name: str = "key") -> str:
    if not isinstance(value, str) or not value:
        raise ArgumentError(f"{name} must be a non-empty string")
    return value


def target_type(type_: Any, default: Any) -> Any:
    """Decoding type: *type_* when given, else the type of a non-None *default*."""
    if type_ is not None:
        return type_
    if default is not None:
        return type(default)
    return Any


class SettingsStore:
    """Reads and writes typed values through a ``SettingsContainer``.

    Nothing is cached: every call goes to the container, so two stores over the
    same container see each other's writes. Values must be read back with the
    serializer that wrote them.
    """

    def __init__(self, container: SettingsContainer, serializer: ObjectSerializer) -> None:
        if container is None:
            raise ArgumentError("container is required")
        if serializer is None:
            raise ArgumentError("serializer is required")
        self.container = container
        self.serializer = serializer

    # ------------------------------- top-level ------------------------------
    def exists(self, key: str) -> bool:
        return self.container.contains_key(_require_key(key))

    def keys(self) -> list[str]:
        return self.container.keys()

    def read(self, key: str, default: Any = None, *, type_: Any = None) -> Any:
        """Return the value at *key*, or *default* when the key is absent, empty or null.

        A value that is present but cannot be decoded raises FormatError.
        """
        found, value = self.try_read(key, type_=target_type(type_, default))
        return value if found else default

    def try_read(self, key: str, *, type_: Any = None) -> Tuple[bool, Any]:
        """Return ``(True, value)`` when *key* holds a value, else ``(False, None)``."""
        stored = self.container.get(_require_key(key))
        if stored is None:
            return False, None
        if isinstance(stored, CompositeValue):
            raise FormatError(f"{key!r} holds a composite, not a single value")
        if stored.is_empty or self.serializer.is_null(stored.value):
            return False, None
        return True, self.serializer.deserialize(stored.value, type_ if type_ is not None else Any)

    def write(self, key: str, value: Any) -> None:
        """Store *value* at *key*, replacing any scalar or composite there."""
        self.container.set(_require_key(key), Scalar(self.serializer.serialize(value)))
        logger.debug("Saved setting %r", key)

    def delete(self, key: str) -> bool:
        removed = self.container.remove(_require_key(key))
        logger.debug("Delete setting %r: %s", key, "removed" if removed else "absent")
        return removed

    def clear(self) -> None:
        self.container.clear()

    # ------------------------------- composites -----------------------------
    def _composite(self, composite_key: str) -> Optional[CompositeValue]:
        stored = self.container.get(_require_key(composite_key, "composite_key"))
        return stored if isinstance(stored, CompositeValue) else None

    def exists_composite(self, composite_key: str, key: str) -> bool:
        _require_key(key)
        composite = self._composite(composite_key)
        return composite is not None and key in composite

    def read_composite(self, composite_key: str, key: str, default: Any = None, *, type_: Any = None) -> Any:
        """Return sub-value *key* of the composite, or *default* when either is absent.

        Only a present, non-empty sub-value is decoded; a malformed one raises
        FormatError.
        """
        found, value = self.try_read_composite(composite_key, key, type_=target_type(type_, default))
        return value if found else default

    def try_read_composite(self, composite_key: str, key: str, *, type_: Any = None) -> Tuple[bool, Any]:
        _require_key(key)
        composite = self._composite(composite_key)
        if composite is None:
            return False, None
        raw = composite.get(key)
        if self.serializer.is_null(raw):
            return False, None
        return True, self.serializer.deserialize(raw, type_ if type_ is not None else Any)

    def read_composite_values(self, composite_key: str, *, type_: Any = None) -> Optional[dict[str, Any]]:
        """Decode every sub-value of a composite; None when the composite is absent."""
        composite = self._composite(composite_key)
        if composite is None:
            return None
        decode_as = type_ if type_ is not None else Any
        return {
            key: self.serializer.deserialize(raw, decode_as)
            for key, raw in composite.values.items()
            if raw
        }

    def write_composite(self, composite_key: str, values: Mapping[str, Any]) -> None:
        """Merge *values* into the composite at *composite_key*.

        Sub-keys in *values* are updated or added; other sub-keys keep their
        values. A missing composite (or a scalar at that key) is replaced by a
        new composite holding exactly *values*.

        This is a read-modify-write: a concurrent writer of the same composite
        can lose its update.
        """
        if values is None:
            raise ArgumentError("values is required")
        serialized = {_require_key(key): self.serializer.serialize(value) for key, value in values.items()}
        composite = self._composite(composite_key)
        if composite is None:
            composite = CompositeValue()
        composite.merge(serialized)
        self.container.set(composite_key, composite)
        logger.debug("Saved %d value(s) into composite %r", len(serialized), composite_key)

    def delete_composite(self, composite_key: str, key: str) -> bool:
        """Remove sub-key *key*; the composite itself stays, even when emptied."""
        _require_key(key)
        composite = self._composite(composite_key)
        if composite is None or not composite.remove(key):
            return False
        self.container.set(composite_key, composite)
        logger.debug("Removed %r from composite %r", key, composite_key)
        return True
