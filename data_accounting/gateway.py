"""Read-only actions exposed to external verifiers."""
from __future__ import annotations

import logging

from data_accounting.entities.verification import MerkleNode, VerificationHash
from data_accounting.merkle.service import MerkleProofService
from data_accounting.results import ErrorKind, Failure, Result, Success
from data_accounting.services.interfaces import PageVerificationRepository

logger = logging.getLogger(__name__)

SIGN_STATEMENT = "I sign the following page verification_hash: [0x{hash}]"


def _parse_non_negative_int(raw: str, name: str) -> int | Failure:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return Failure(ErrorKind.INVALID_PARAMETER, f"{name} must be an integer, got '{raw}'")
    if value < 0:
        return Failure(ErrorKind.INVALID_PARAMETER, f"{name} must not be negative, got {value}")
    return value


class Gateway:
    def __init__(
        self,
        proof_service: MerkleProofService,
        page_verification_repository: PageVerificationRepository,
    ):
        self.proof_service = proof_service
        self.page_verification_repository = page_verification_repository

    def request_merkle_proof(
        self,
        witness_event_id: str | None,
        leaf_digest: str | None,
        depth: str | None = None,
    ) -> Result[list[MerkleNode]]:
        """Proof nodes for a leaf; several may come back when depth is omitted."""
        parsed_depth = None
        if witness_event_id and leaf_digest and depth not in (None, ""):
            parsed_depth = _parse_non_negative_int(depth, "depth")
            if isinstance(parsed_depth, Failure):
                return parsed_depth
        return self.proof_service.request_proof(witness_event_id, leaf_digest, parsed_depth)

    def request_stored_hash(self, rev_id: str | None) -> Result[list[VerificationHash]]:
        if rev_id in (None, ""):
            return Failure(ErrorKind.MISSING_PARAMETER, "rev_id is not specified but expected")
        parsed = _parse_non_negative_int(rev_id, "rev_id")
        if isinstance(parsed, Failure):
            return parsed
        records = self.page_verification_repository.find_by_rev_id(parsed)
        logger.debug("rev_id=%d has %d verification hashes", parsed, len(records))
        return Success(records)

    @staticmethod
    def signable_statement(records: list[VerificationHash]) -> str:
        return "".join(SIGN_STATEMENT.format(hash=r.verification_hash) for r in records)
