from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class VerificationHash:
    """Digest of a single page revision. Never edited after creation."""
    rev_id: int
    verification_hash: str


@dataclass(frozen=True)
class WitnessEvent:
    """Anchor of a witnessed Merkle tree; proofs reconcile against recorded_root."""
    witness_event_id: str
    recorded_root: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    domain_id: str | None = None
    witness_network: str | None = None
    smart_contract_address: str | None = None
    transaction_hash: str | None = None
    sender_account_address: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MerkleNode:
    """One stored proof step: successor = combine(left_leaf, right_leaf)."""
    witness_event_id: str
    depth: int
    left_leaf: str
    right_leaf: str
    successor: str

    def contains(self, digest: str) -> bool:
        return digest in (self.left_leaf, self.right_leaf)
