"""Serializer port: the value <-> string boundary of every store.

Settings and files only ever hold strings; an ``ObjectSerializer`` decides how
values become those strings and back. A store keeps the same serializer for its
whole life. Reading a key with a different serializer than the one that wrote
it is not detected and is the caller's responsibility.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUserError
from pydantic_core import PydanticSerializationError

from .errors import ArgumentError, FormatError


class ObjectSerializer(ABC):
    """Converts values to a storage string and back."""

    @abstractmethod
    def serialize(self, value: Any) -> str:
        """Encode *value*; raise FormatError if it cannot be encoded."""

    @abstractmethod
    def deserialize(self, data: str, type_: Any = Any) -> Any:
        """Decode *data* as *type_*; raise FormatError if it is not a valid encoding."""

    def is_null(self, data: Optional[str]) -> bool:
        """True when *data* encodes no value; stores read it as absent."""
        return not data


@lru_cache(maxsize=256)
def _cached_adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _adapter_for(type_: Any) -> TypeAdapter:
    try:
        hash(type_)
    except TypeError:
        return TypeAdapter(type_)
    return _cached_adapter(type_)


class JsonObjectSerializer(ObjectSerializer):
    """JSON encoding backed by pydantic.

    Anything pydantic can dump (primitives, containers, dataclasses, models,
    datetimes, enums) is accepted by ``serialize``. ``deserialize`` validates
    the JSON against ``type_``, so a dataclass written as JSON comes back as the
    dataclass when its type is passed, and as a plain dict otherwise.
    """

    def serialize(self, value: Any) -> str:
        try:
            return _adapter_for(Any).dump_json(value).decode("utf-8")
        except PydanticSerializationError as exc:
            raise FormatError(f"cannot serialize value of type {type(value).__name__}: {exc}") from exc

    def is_null(self, data: Optional[str]) -> bool:
        return not data or data.strip() == "null"

    def deserialize(self, data: str, type_: Any = Any) -> Any:
        try:
            adapter = _adapter_for(type_)
        except PydanticUserError as exc:
            raise ArgumentError(f"no decoder for type {type_!r}: {exc}") from exc
        try:
            return adapter.validate_json(data)
        except ValidationError as exc:
            raise FormatError(f"stored value is not a valid {_type_name(type_)}: {exc}") from exc


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)


def default_serializer() -> ObjectSerializer:
    """Serializer used when the caller does not provide one."""
    return JsonObjectSerializer()
