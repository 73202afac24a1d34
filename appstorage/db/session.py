"""Engine/session helpers for the settings database.

One engine (and its sessionmaker) is kept per database URL until
``dispose_engine`` or ``dispose_all_engines`` releases it.
"""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from typing import Dict, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from appstorage.core.config import get_config
from appstorage.core.errors import ArgumentError

Base = declarative_base()

_bindings: Dict[str, Tuple[Engine, sessionmaker]] = {}
_bindings_lock = Lock()


def sqlite_url(path: Path | str) -> str:
    return f"sqlite:///{Path(path)}"


def _normalize(database_url: str) -> str:
    url = (database_url or "").strip()
    if not url:
        raise ArgumentError("a database URL is required for the settings container.")
    return url


def _binding(database_url: str) -> Tuple[Engine, sessionmaker]:
    url = _normalize(database_url)
    with _bindings_lock:
        binding = _bindings.get(url)
        if binding is None:
            connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
            engine = create_engine(
                url,
                future=True,
                pool_pre_ping=True,
                echo=get_config().sql_echo,
                connect_args=connect_args,
            )
            factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
            binding = _bindings[url] = (engine, factory)
        return binding


def get_engine(database_url: str) -> Engine:
    return _binding(database_url)[0]


def _get_sessionmaker(database_url: str) -> sessionmaker:
    return _binding(database_url)[1]


def dispose_engine(database_url: str) -> bool:
    """Close the pooled connections of *database_url*; False when none were open."""
    url = _normalize(database_url)
    with _bindings_lock:
        binding = _bindings.pop(url, None)
    if binding is None:
        return False
    binding[0].dispose()
    return True


def dispose_all_engines() -> None:
    with _bindings_lock:
        bindings = list(_bindings.values())
        _bindings.clear()
    for engine, _factory in bindings:
        engine.dispose()


@contextmanager
def get_session(database_url: str) -> Session:
    session: Session = _get_sessionmaker(database_url)()
    try:
        yield session
    finally:
        session.close()
