"""SQLAlchemy models for the settings container."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, JSON, String, Text, func

from .session import Base

SCALAR_KIND = "scalar"
COMPOSITE_KIND = "composite"


class SettingEntry(Base):
    """One top-level setting.

    ``kind`` tags which payload column is in use: ``scalar_value`` for a
    scalar, ``composite_values`` (sub-key -> serialized string) for a composite.
    """

    __tablename__ = "settings"

    key = Column(String(255), primary_key=True)
    kind = Column(String(16), nullable=False, default=SCALAR_KIND)
    scalar_value = Column(Text, nullable=True)
    composite_values = Column(JSON(none_as_null=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
