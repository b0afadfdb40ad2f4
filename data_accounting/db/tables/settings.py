"""Persisted configuration overrides."""
from __future__ import annotations

from sqlmodel import Field, SQLModel


class SettingRow(SQLModel, table=True):
    """One row per overridden setting; das_value holds the JSON-encoded value."""
    __tablename__ = "da_settings"

    das_name: str = Field(primary_key=True)
    das_value: str
