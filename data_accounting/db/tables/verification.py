"""Per-revision verification hashes."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PageVerificationRow(SQLModel, table=True):
    __tablename__ = "page_verification"

    rev_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    verification_hash: str = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
