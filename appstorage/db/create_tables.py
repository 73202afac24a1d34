"""Create the settings schema for a database URL."""
from __future__ import annotations

import sys

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(database_url: str) -> None:
    engine = get_engine(database_url)
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    if len(sys.argv) != 2:
        raise SystemExit("usage: python -m appstorage.db.create_tables <database-url>")
    try:
        create_all(sys.argv[1])
        print("Settings table created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
