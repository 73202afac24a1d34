from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

# Garante que o pacote appstorage seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appstorage.core import config as core_config  # noqa: E402
from appstorage.core.errors import ArgumentError, NotFoundError  # noqa: E402
from appstorage.core.serializers import JsonObjectSerializer  # noqa: E402
from appstorage.db import session as db_session  # noqa: E402
from appstorage.domain.values import FolderEntry, ItemKind  # noqa: E402
from appstorage.repositories.app_data import AppData  # noqa: E402
from appstorage.services.storage_helper import (  # noqa: E402
    ApplicationDataStorageHelper,
    for_current_scope,
    for_user_scope,
)


@pytest.fixture()
def data_root(tmp_path, monkeypatch):
    """Point the data root at a temp dir and reset cached config/engines."""
    monkeypatch.setenv("APPSTORAGE_DATA_ROOT", str(tmp_path))
    monkeypatch.setenv("APPSTORAGE_APP_NAME", "TestApp")
    core_config.get_config.cache_clear()

    yield tmp_path

    db_session.dispose_all_engines()
    core_config.get_config.cache_clear()


def test_constructor_requires_root_and_serializer(data_root):
    with pytest.raises(ArgumentError):
        ApplicationDataStorageHelper(None, JsonObjectSerializer())  # type: ignore[arg-type]
    with pytest.raises(ArgumentError):
        ApplicationDataStorageHelper(AppData.current(), None)  # type: ignore[arg-type]
    with pytest.raises(ArgumentError):
        AppData(None)  # type: ignore[arg-type]


def test_current_scope_layout(data_root):
    helper = for_current_scope()

    assert helper.app_data.root == data_root / "TestApp"
    assert helper.folder.path == data_root / "TestApp" / "LocalState"
    assert (data_root / "TestApp" / "settings.db").exists()
    assert isinstance(helper.serializer, JsonObjectSerializer)


def test_with_default_serializer(data_root):
    helper = ApplicationDataStorageHelper.with_default_serializer(AppData(data_root / "custom"))
    assert isinstance(helper.serializer, JsonObjectSerializer)
    assert helper.folder.path == data_root / "custom" / "LocalState"


class EmptyLengthSerializer(JsonObjectSerializer):
    """Falsy serializer: defines ``__len__`` returning 0."""

    def __len__(self) -> int:
        return 0


def test_falsy_serializer_is_kept(data_root):
    serializer = EmptyLengthSerializer()
    assert for_current_scope(serializer).serializer is serializer
    assert asyncio.run(for_user_scope("bob", serializer)).serializer is serializer


def test_close_releases_database_and_helper_still_works(data_root):
    helper = for_current_scope()
    helper.write("k", 1)
    url = helper.settings.database_url

    helper.close()
    assert db_session.dispose_engine(url) is False
    assert helper.read("k", 0) == 1


def test_user_scope_is_isolated_from_current_scope(data_root):
    current = for_current_scope()
    alice = asyncio.run(for_user_scope("alice"))

    assert alice.app_data.root == data_root / "TestApp" / "Users" / "alice"

    current.write("theme", "dark")
    alice.write("theme", "light")
    assert current.read("theme") == "dark"
    assert alice.read("theme") == "light"

    asyncio.run(alice.create_file("profile.json", {"name": "Alice"}))
    assert asyncio.run(current.item_exists("profile.json")) is False


@pytest.mark.parametrize("user", ["", "   ", "..", "a/b", None])
def test_user_scope_rejects_invalid_users(data_root, user):
    with pytest.raises(ArgumentError):
        asyncio.run(for_user_scope(user))


def test_helpers_over_same_root_observe_each_other(data_root):
    first = for_current_scope()
    second = for_current_scope()

    first.write("volume", 7)
    first.write_composite("window", {"width": 900})
    second.write_composite("window", {"height": 600})
    asyncio.run(first.create_file("notes/today.json", ["buy milk"]))

    assert second.read("volume", 0) == 7
    assert first.read_composite_values("window") == {"width": 900, "height": 600}
    assert asyncio.run(second.read_file("notes/today.json")) == ["buy milk"]


def test_facade_settings_flow(data_root):
    helper = for_current_scope()

    assert helper.read("missing", 42) == 42
    helper.write("count", 1)
    assert helper.exists("count")
    assert helper.try_read("count", type_=int) == (True, 1)

    helper.write_composite("window", {"a": 1, "b": 2})
    assert helper.exists_composite("window", "a")
    assert helper.read_composite("window", "b", 0) == 2
    assert helper.try_read_composite("window", "c") == (False, None)
    assert helper.delete_composite("window", "a") is True
    assert helper.exists("window")
    assert helper.keys() == ["count", "window"]

    assert helper.delete("count") is True
    helper.clear()
    assert helper.exists("window") is False
    assert helper.settings.keys() == []


def test_facade_file_flow(data_root):
    helper = for_current_scope()

    async def flow():
        await helper.create_folder("cache")
        await helper.create_folder("cache")
        await helper.create_file("cache/devices.json", [1])
        await helper.create_file("cache/devices.json", [1, 2])
        listing = await helper.read_folder("cache")
        content = await helper.read_file("cache/devices.json", [])
        found = await helper.file_exists("devices.json", recursive=True)
        await helper.delete_item("cache/devices.json")
        gone = await helper.item_exists("cache/devices.json")
        return listing, content, found, gone

    listing, content, found, gone = asyncio.run(flow())
    assert listing == [FolderEntry(ItemKind.FILE, "devices.json")]
    assert content == [1, 2]
    assert found is True
    assert gone is False

    with pytest.raises(NotFoundError):
        asyncio.run(helper.delete_item("cache/devices.json"))
