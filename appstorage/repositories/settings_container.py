"""Flat settings containers (string key -> scalar or composite)."""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional
import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from appstorage.core.errors import ArgumentError, CollaboratorError
from appstorage.db.create_tables import create_all
from appstorage.db.models import COMPOSITE_KIND, SCALAR_KIND, SettingEntry
from appstorage.db.session import dispose_engine, get_session
from appstorage.domain.values import CompositeValue, Scalar, StoredValue

logger = logging.getLogger(__name__)


class SettingsContainer(ABC):
    """Key-value container a settings store writes through to.

    Values are returned as copies: mutating a returned ``CompositeValue`` has no
    effect until it is passed back to ``set``.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[StoredValue]:
        """Return the stored value or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: StoredValue) -> None:
        """Store *value*, replacing whatever was stored under *key*."""

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove *key*; return whether it was present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""

    @abstractmethod
    def contains_key(self, key: str) -> bool:
        """Return True when *key* is present."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all present keys."""

    def close(self) -> None:
        """Release held resources; the container reopens them on next use."""


@contextmanager
def _database_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise CollaboratorError(f"settings database failed to {action}: {exc}") from exc


class SQLSettingsContainer(SettingsContainer):
    """Settings container backed by one SQL table (one database per scope)."""

    def __init__(self, database_url: str) -> None:
        if not (database_url or "").strip():
            raise ArgumentError("database_url is required")
        self.database_url = database_url
        with _database_errors("create the settings table"):
            create_all(database_url)

    def __repr__(self) -> str:
        return f"SQLSettingsContainer({self.database_url!r})"

    def get(self, key: str) -> Optional[StoredValue]:
        with _database_errors(f"read {key!r}"), get_session(self.database_url) as session:
            entry = session.get(SettingEntry, key)
            if entry is None:
                return None
            return _to_value(entry)

    def set(self, key: str, value: StoredValue) -> None:
        now = datetime.now(timezone.utc)
        with _database_errors(f"write {key!r}"), get_session(self.database_url) as session:
            entry = session.get(SettingEntry, key)
            if entry is None:
                entry = SettingEntry(key=key)
                session.add(entry)
            if isinstance(value, CompositeValue):
                kind = entry.kind = COMPOSITE_KIND
                entry.scalar_value = None
                entry.composite_values = dict(value.values)
            elif isinstance(value, Scalar):
                kind = entry.kind = SCALAR_KIND
                entry.scalar_value = value.value
                entry.composite_values = None
            else:
                raise ArgumentError(f"expected Scalar or CompositeValue, got {type(value).__name__}")
            entry.updated_at = now
            session.commit()
        logger.debug("Stored %s setting %r", kind, key)

    def remove(self, key: str) -> bool:
        with _database_errors(f"remove {key!r}"), get_session(self.database_url) as session:
            result = session.execute(delete(SettingEntry).where(SettingEntry.key == key))
            session.commit()
            return result.rowcount > 0

    def clear(self) -> None:
        with _database_errors("clear settings"), get_session(self.database_url) as session:
            session.execute(delete(SettingEntry))
            session.commit()
        logger.debug("Cleared settings in %s", self.database_url)

    def contains_key(self, key: str) -> bool:
        with _database_errors(f"look up {key!r}"), get_session(self.database_url) as session:
            stmt = select(SettingEntry.key).where(SettingEntry.key == key).limit(1)
            return session.execute(stmt).first() is not None

    def keys(self) -> list[str]:
        with _database_errors("list settings"), get_session(self.database_url) as session:
            return list(session.execute(select(SettingEntry.key).order_by(SettingEntry.key)).scalars().all())

    def close(self) -> None:
        if dispose_engine(self.database_url):
            logger.debug("Disposed engine for %s", self.database_url)


def _to_value(entry: SettingEntry) -> StoredValue:
    if entry.kind == COMPOSITE_KIND:
        return CompositeValue(dict(entry.composite_values or {}))
    return Scalar(entry.scalar_value)
