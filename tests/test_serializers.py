from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import sys
from pathlib import Path
from typing import Any

import pytest

# Garante que o pacote appstorage seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appstorage.core.errors import FormatError, StorageError  # noqa: E402
from appstorage.core.serializers import JsonObjectSerializer, ObjectSerializer, default_serializer  # noqa: E402


@dataclass
class Window:
    width: int
    height: int
    title: str = "main"


@pytest.mark.parametrize(
    "value",
    [0, 42, -1.5, "héllo", True, [1, 2, 3], {"a": 1, "b": [True, None]}, {3, 1, 2}, (1, "x")],
)
def test_roundtrip_with_value_type(value):
    serializer = JsonObjectSerializer()
    assert serializer.deserialize(serializer.serialize(value), type(value)) == value


def test_roundtrip_dataclass_and_datetime():
    serializer = JsonObjectSerializer()
    window = Window(width=800, height=600)
    assert serializer.deserialize(serializer.serialize(window), Window) == window

    stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert serializer.deserialize(serializer.serialize(stamp), datetime) == stamp


def test_untyped_deserialize_returns_plain_json():
    serializer = JsonObjectSerializer()
    data = serializer.serialize(Window(width=1, height=2))
    assert serializer.deserialize(data) == {"width": 1, "height": 2, "title": "main"}
    assert serializer.deserialize("null", Any) is None


def test_null_encodings():
    serializer = JsonObjectSerializer()
    assert serializer.is_null(serializer.serialize(None))
    assert serializer.is_null("")
    assert serializer.is_null(None)
    assert not serializer.is_null("0")
    assert not serializer.is_null('"null"')


def test_serialize_is_deterministic():
    serializer = JsonObjectSerializer()
    value = {"b": [1, 2], "a": {"x": None}}
    assert serializer.serialize(value) == serializer.serialize(dict(value))


def test_invalid_encoding_raises_format_error():
    serializer = JsonObjectSerializer()
    with pytest.raises(FormatError):
        serializer.deserialize("{not json", dict)
    with pytest.raises(FormatError):
        serializer.deserialize('"abc"', int)
    with pytest.raises(FormatError):
        serializer.deserialize('{"width": "wide"}', Window)


def test_unserializable_value_raises_format_error():
    with pytest.raises(FormatError):
        JsonObjectSerializer().serialize(object())


def test_format_error_is_a_value_error():
    assert issubclass(FormatError, ValueError)
    assert issubclass(FormatError, StorageError)


def test_default_serializer_is_json():
    serializer = default_serializer()
    assert isinstance(serializer, ObjectSerializer)
    assert isinstance(serializer, JsonObjectSerializer)
