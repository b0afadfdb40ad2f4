"""Merkle witness trees for tamper evidence of revisions and files."""
from data_accounting.merkle.hasher import Hasher
from data_accounting.merkle.tree import build_witness_tree, get_root, is_consistent
from data_accounting.merkle.service import MerkleProofService, WitnessTreeService
from data_accounting.merkle.verify import InclusionReport, verify_inclusion

__all__ = [
    "Hasher",
    "InclusionReport",
    "MerkleProofService",
    "WitnessTreeService",
    "build_witness_tree",
    "get_root",
    "is_consistent",
    "verify_inclusion",
]
