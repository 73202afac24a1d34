"""Value types stored in settings containers and returned by folder listings."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Mapping, NamedTuple, Optional, Union


@dataclass(frozen=True)
class Scalar:
    """A single serialized value stored under a top-level key."""

    value: Optional[str]

    @property
    def is_empty(self) -> bool:
        return not self.value


@dataclass
class CompositeValue:
    """A group of serialized sub-values stored as one top-level entry.

    Sub-keys are unique and unordered. An empty composite is a valid value and
    is not the same thing as a missing key.
    """

    values: dict[str, Optional[str]] = field(default_factory=dict)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def upsert(self, key: str, value: Optional[str]) -> None:
        self.values[key] = value

    def merge(self, values: Mapping[str, Optional[str]]) -> None:
        """Update or insert each given sub-key; sub-keys not given are left alone."""
        for key, value in values.items():
            self.upsert(key, value)

    def remove(self, key: str) -> bool:
        if key not in self.values:
            return False
        del self.values[key]
        return True

    def copy(self) -> "CompositeValue":
        return CompositeValue(dict(self.values))


StoredValue = Union[Scalar, CompositeValue]


class ItemKind(Enum):
    """Kind of a folder child as reported by a listing."""

    NONE = "none"
    FILE = "file"
    FOLDER = "folder"


class FolderEntry(NamedTuple):
    kind: ItemKind
    name: str


class CreationCollisionOption(Enum):
    """What to do when creating a file or folder whose name is already taken."""

    GENERATE_UNIQUE_NAME = "generate_unique_name"
    REPLACE_EXISTING = "replace_existing"
    FAIL_IF_EXISTS = "fail_if_exists"
    OPEN_IF_EXISTS = "open_if_exists"
