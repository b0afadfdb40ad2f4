"""Caller-side verification: walk single-level proofs from leaf to root."""
from __future__ import annotations

from dataclasses import dataclass, field

from data_accounting.entities.verification import MerkleNode
from data_accounting.merkle.hasher import Hasher
from data_accounting.merkle.service import MerkleProofService
from data_accounting.results import ErrorKind, Failure
from data_accounting.services.interfaces import MerkleTreeStore


@dataclass
class InclusionReport:
    witness_event_id: str
    leaf_digest: str
    verified: bool
    path: list[MerkleNode] = field(default_factory=list)
    computed_root: str | None = None
    recorded_root: str | None = None
    reason: str | None = None


def verify_inclusion(
    store: MerkleTreeStore,
    hasher: Hasher,
    witness_event_id: str,
    leaf_digest: str,
) -> InclusionReport:
    """Recompute the recorded root of a witness event from one leaf digest.

    Each depth is requested explicitly; the recomputed successor becomes the
    search key of the next depth until it matches the recorded root.
    """
    proof_service = MerkleProofService(store)
    report = InclusionReport(
        witness_event_id=witness_event_id, leaf_digest=leaf_digest, verified=False,
    )
    event = store.get_event(witness_event_id)
    if event is None:
        report.reason = f"Witness event '{witness_event_id}' not found"
        return report
    report.recorded_root = event.recorded_root

    current = leaf_digest
    depth = 0
    while True:
        result = proof_service.request_proof(witness_event_id, current, depth)
        if isinstance(result, Failure):
            if result.kind == ErrorKind.NOT_FOUND and depth > 0:
                report.reason = f"Path ends at depth {depth} without reaching the recorded root"
            else:
                report.reason = result.message
            return report

        node = result.value[0]
        successor = hasher.combine(node.left_leaf, node.right_leaf)
        report.path.append(node)
        if successor != node.successor:
            report.reason = f"Stored successor at depth {depth} does not match its leaves"
            return report

        current = successor
        report.computed_root = current
        if current == event.recorded_root:
            report.verified = True
            return report
        depth += 1
