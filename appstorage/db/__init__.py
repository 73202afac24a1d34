"""Settings database helpers."""

from .session import Base, dispose_all_engines, dispose_engine, get_engine, get_session, sqlite_url

__all__ = ["Base", "dispose_all_engines", "dispose_engine", "get_engine", "get_session", "sqlite_url"]
