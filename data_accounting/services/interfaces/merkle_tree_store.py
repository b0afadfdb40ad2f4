from __future__ import annotations

from abc import ABC, abstractmethod

from data_accounting.entities.verification import MerkleNode, WitnessEvent


class MerkleTreeStore(ABC):
    """Append-only storage of witness events and their proof nodes."""

    @abstractmethod
    def get_event(self, witness_event_id: str) -> WitnessEvent | None:
        raise NotImplementedError

    @abstractmethod
    def get_nodes(
        self, witness_event_id: str, leaf_digest: str, depth: int | None = None,
    ) -> list[MerkleNode]:
        """Nodes of the event where leaf_digest is the left or right leaf.

        Without depth every match is returned, ordered by depth. With depth
        at most one node is returned.
        """
        raise NotImplementedError

    @abstractmethod
    def max_depth(self, witness_event_id: str) -> int | None:
        raise NotImplementedError

    @abstractmethod
    def add_event(self, event: WitnessEvent, nodes: list[MerkleNode]) -> None:
        raise NotImplementedError
