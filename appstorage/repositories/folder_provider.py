"""Filesystem folder provider.

Items are addressed by relative, ``/``-separated names below a folder. All
public operations are coroutines; the blocking filesystem calls run in a worker
thread through ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Iterator, Optional
import logging

from appstorage.core.errors import ArgumentError, CollaboratorError, NotFoundError
from appstorage.domain.values import CreationCollisionOption

logger = logging.getLogger(__name__)


@contextmanager
def _filesystem_errors(action: str, path: Path) -> Iterator[None]:
    try:
        yield
    except FileNotFoundError as exc:
        raise NotFoundError(f"cannot {action}: {path} does not exist") from exc
    except OSError as exc:
        raise CollaboratorError(f"cannot {action} {path}: {exc}") from exc


class StorageItem:
    """A file, folder or unclassifiable entry on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StorageItem) and other._path == self._path

    def __hash__(self) -> int:
        return hash(self._path)

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_file(self) -> bool:
        return self._path.is_file()

    @property
    def is_folder(self) -> bool:
        return self._path.is_dir()

    async def delete(self) -> None:
        await asyncio.to_thread(self._delete)

    def _delete(self) -> None:
        with _filesystem_errors("delete", self._path):
            if self._path.is_dir() and not self._path.is_symlink():
                shutil.rmtree(self._path)
            else:
                self._path.unlink()
        logger.debug("Deleted %s", self._path)


class StorageFile(StorageItem):
    async def read_text(self) -> str:
        return await asyncio.to_thread(self._read_text)

    def _read_text(self) -> str:
        with _filesystem_errors("read", self._path):
            return self._path.read_text(encoding="utf-8")


class StorageFolder(StorageItem):
    """A folder whose children can be listed, created, read and removed."""

    def _resolve(self, name: str, *, allow_self: bool = False) -> Path:
        relative = PurePosixPath((name or "").replace("\\", "/"))
        parts = [part for part in relative.parts if part not in ("", ".")]
        # A drive-qualified part ("D:") would re-anchor the join on Windows.
        if relative.is_absolute() or any(part == ".." or PureWindowsPath(part).drive for part in parts):
            raise ArgumentError(f"path must stay inside {self._path}: {name!r}")
        if not parts and not allow_self:
            raise ArgumentError("an item name is required")
        path = self._path.joinpath(*parts)
        if not path.is_relative_to(self._path):
            raise ArgumentError(f"path must stay inside {self._path}: {name!r}")
        return path

    # ------------------------------- lookups -------------------------------
    async def try_get_item(self, name: str) -> Optional[StorageItem]:
        """Return the item at *name* or None when nothing is there."""
        path = self._resolve(name)
        return await asyncio.to_thread(_classify, path)

    async def get_item(self, name: str) -> StorageItem:
        item = await self.try_get_item(name)
        if item is None:
            raise NotFoundError(f"no item named {name!r} in {self._path}")
        return item

    async def get_folder(self, name: str) -> "StorageFolder":
        path = self._resolve(name, allow_self=True)
        is_dir = await asyncio.to_thread(path.is_dir)
        if not is_dir:
            raise NotFoundError(f"no folder named {name!r} in {self._path}")
        return StorageFolder(path)

    async def get_items(self) -> list[StorageItem]:
        """Immediate children, sorted by name."""
        return await asyncio.to_thread(self._get_items)

    def _get_items(self) -> list[StorageItem]:
        with _filesystem_errors("list", self._path):
            names = sorted(os.listdir(self._path))
        items = []
        for child in names:
            item = _classify(self._path / child)
            if item is not None:
                items.append(item)
        return items

    async def file_exists(self, name: str, recursive: bool = False) -> bool:
        return await asyncio.to_thread(self._file_exists, self._resolve(name), recursive)

    def _file_exists(self, target: Path, recursive: bool) -> bool:
        if target.is_file():
            return True
        if not recursive:
            return False
        relative = target.relative_to(self._path)
        for dirpath, _dirnames, _filenames in os.walk(self._path):
            if Path(dirpath, relative).is_file():
                return True
        return False

    async def read_text(self, name: str) -> Optional[str]:
        """Text of the file at *name*, or None when there is no item there."""
        return await asyncio.to_thread(self._read_text_at, self._resolve(name))

    def _read_text_at(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CollaboratorError(f"cannot read {path}: {exc}") from exc

    # ------------------------------- creation ------------------------------
    async def create_folder(
        self,
        name: str,
        option: CreationCollisionOption = CreationCollisionOption.FAIL_IF_EXISTS,
    ) -> "StorageFolder":
        path = self._resolve(name)
        created = await asyncio.to_thread(self._create_folder, path, option)
        return StorageFolder(created)

    def _create_folder(self, path: Path, option: CreationCollisionOption) -> Path:
        with _filesystem_errors("create folder", path):
            if os.path.lexists(path):
                if option is CreationCollisionOption.OPEN_IF_EXISTS and path.is_dir():
                    return path
                if option is CreationCollisionOption.GENERATE_UNIQUE_NAME:
                    path = _unique_path(path)
                elif option is CreationCollisionOption.REPLACE_EXISTING:
                    StorageItem(path)._delete()
                else:
                    raise FileExistsError(f"{path} already exists")
            path.mkdir(parents=True)
        logger.debug("Created folder %s", path)
        return path

    async def create_file(
        self,
        name: str,
        text: str,
        option: CreationCollisionOption = CreationCollisionOption.FAIL_IF_EXISTS,
    ) -> StorageFile:
        path = self._resolve(name)
        written = await asyncio.to_thread(self._create_file, path, text, option)
        return StorageFile(written)

    def _create_file(self, path: Path, text: str, option: CreationCollisionOption) -> Path:
        with _filesystem_errors("create file", path):
            path.parent.mkdir(parents=True, exist_ok=True)
            if os.path.lexists(path):
                if option is CreationCollisionOption.OPEN_IF_EXISTS and path.is_file():
                    return path
                if option is CreationCollisionOption.GENERATE_UNIQUE_NAME:
                    path = _unique_path(path)
                elif option is not CreationCollisionOption.REPLACE_EXISTING:
                    raise FileExistsError(f"{path} already exists")
            _atomic_write(path, text)
        logger.debug("Wrote %s", path)
        return path


def _classify(path: Path) -> Optional[StorageItem]:
    if path.is_dir():
        return StorageFolder(path)
    if path.is_file():
        return StorageFile(path)
    if os.path.lexists(path):
        return StorageItem(path)
    return None


def _unique_path(path: Path) -> Path:
    counter = 2
    while True:
        candidate = path.with_name(f"{path.stem} ({counter}){path.suffix}")
        if not os.path.lexists(candidate):
            return candidate
        counter += 1


def _file_mode(path: Path) -> int:
    """Mode of the file being replaced, else the umask default (mkstemp uses 0600)."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _atomic_write(path: Path, text: str) -> None:
    # The target only ever sees the old content or the complete new content.
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
