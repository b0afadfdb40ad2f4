"""Merkle services: proof lookup for verifiers, tree commits for witnessing."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from data_accounting.entities.verification import MerkleNode, WitnessEvent
from data_accounting.merkle.hasher import Hasher
from data_accounting.merkle.tree import build_witness_tree, get_root
from data_accounting.results import ErrorKind, Failure, Result, Success
from data_accounting.services.interfaces import MerkleTreeStore


logger = logging.getLogger(__name__)


class MerkleProofService:
    """Single-level proof lookups against a witness event.

    A digest may recur at several tree positions (a replayed leaf), so a
    lookup without depth can return several nodes. Picking the depth that
    belongs to the audit path is up to the caller; see
    ``data_accounting.merkle.verify.verify_inclusion``.
    """

    def __init__(self, store: MerkleTreeStore):
        self.store = store

    def request_proof(
        self,
        witness_event_id: str | None,
        leaf_digest: str | None,
        depth: int | None = None,
    ) -> Result[list[MerkleNode]]:
        if not witness_event_id:
            return Failure(
                ErrorKind.MISSING_PARAMETER,
                "witness_event_id is not specified but expected",
            )
        if not leaf_digest:
            return Failure(
                ErrorKind.MISSING_PARAMETER,
                "page_verification_hash is not specified but expected",
            )

        if self.store.get_event(witness_event_id) is None:
            return Failure(
                ErrorKind.NOT_FOUND,
                f"Witness event '{witness_event_id}' not found",
            )

        nodes = self.store.get_nodes(witness_event_id, leaf_digest, depth)
        if not nodes:
            logger.debug(
                "No proof node for event=%s leaf=%s depth=%s",
                witness_event_id, leaf_digest[:16], depth,
            )
            where = f" at depth {depth}" if depth is not None else ""
            return Failure(
                ErrorKind.NOT_FOUND,
                f"Hash '{leaf_digest}' is not part of witness event '{witness_event_id}'{where}",
            )
        return Success(nodes)


class WitnessTreeService:
    """Builds the Merkle tree of a witness event and appends it to the store."""

    def __init__(self, store: MerkleTreeStore, hasher: Hasher):
        self.store = store
        self.hasher = hasher

    def commit_event(
        self,
        leaves: list[str],
        *,
        witness_event_id: str | None = None,
        domain_id: str | None = None,
        witness_network: str | None = None,
        smart_contract_address: str | None = None,
        meta: dict[str, Any] | None = None,
        now: datetime | None = None,
    ) -> WitnessEvent | None:
        """Returns the stored event, or None if there are no leaves."""
        if not leaves:
            return None

        now = now or datetime.now(timezone.utc)
        witness_event_id = witness_event_id or f"WIT_{now.strftime('%Y%m%d_%H%M%S_%f')}"

        nodes = build_witness_tree(witness_event_id, leaves, self.hasher)
        root = get_root(nodes)

        event = WitnessEvent(
            witness_event_id=witness_event_id,
            recorded_root=root,
            created_at=now,
            domain_id=domain_id,
            witness_network=witness_network,
            smart_contract_address=smart_contract_address,
            meta=dict(meta or {}),
        )
        self.store.add_event(event, nodes)

        logger.info(
            "Witness event %s: %d leaves, %d nodes, root=%s",
            witness_event_id, len(leaves), len(nodes), root[:16],
        )
        return event
