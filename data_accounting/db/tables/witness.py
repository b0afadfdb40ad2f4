"""Witness events and the Merkle tree nodes anchored by them."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WitnessEventRow(SQLModel, table=True):
    """One row per witness event. recorded_root is the externally witnessed root."""
    __tablename__ = "witness_events"

    id: str = Field(primary_key=True)
    recorded_root: str = Field(index=True)
    domain_id: Optional[str] = Field(default=None, index=True)
    witness_network: Optional[str] = Field(default=None)
    smart_contract_address: Optional[str] = Field(default=None)
    transaction_hash: Optional[str] = Field(default=None)
    sender_account_address: Optional[str] = Field(default=None)
    meta_json: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utc_now, index=True)


class WitnessMerkleNodeRow(SQLModel, table=True):
    """Left/right leaf pair and its successor at one depth of a witness tree."""
    __tablename__ = "witness_merkle_tree"

    id: Optional[int] = Field(default=None, primary_key=True)
    witness_event_id: str = Field(foreign_key="witness_events.id", index=True)
    depth: int = Field(default=0, index=True)
    left_leaf: str = Field(index=True)
    right_leaf: str = Field(index=True)
    successor: str
