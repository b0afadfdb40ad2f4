"""Witness tree construction: leaf digests to per-depth node triples."""
from __future__ import annotations

from data_accounting.entities.verification import MerkleNode
from data_accounting.merkle.hasher import Hasher


def build_witness_tree(
    witness_event_id: str,
    leaves: list[str],
    hasher: Hasher,
) -> list[MerkleNode]:
    """Build the node list for one witness event.

    Depth 0 pairs the raw leaf digests; each further depth pairs the
    successors of the previous one. An odd level is padded by duplicating
    its last digest, which also turns a single leaf into one (x, x) node.
    Nodes come back ordered by depth, then position. The last node's
    successor is the root.
    """
    if not leaves:
        return []

    nodes: list[MerkleNode] = []
    current = list(leaves)
    depth = 0
    while True:
        if len(current) % 2 == 1:
            current.append(current[-1])

        successors: list[str] = []
        for i in range(0, len(current), 2):
            left, right = current[i], current[i + 1]
            successor = hasher.combine(left, right)
            nodes.append(MerkleNode(
                witness_event_id=witness_event_id,
                depth=depth,
                left_leaf=left,
                right_leaf=right,
                successor=successor,
            ))
            successors.append(successor)

        if len(successors) == 1:
            return nodes
        current = successors
        depth += 1


def get_root(nodes: list[MerkleNode]) -> str | None:
    """Successor of the deepest node, or None for an empty tree."""
    if not nodes:
        return None
    return max(nodes, key=lambda n: n.depth).successor


def is_consistent(node: MerkleNode, hasher: Hasher) -> bool:
    return hasher.combine(node.left_leaf, node.right_leaf) == node.successor
