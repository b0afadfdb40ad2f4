from __future__ import annotations

from abc import ABC, abstractmethod

from data_accounting.entities.verification import VerificationHash


class PageVerificationRepository(ABC):
    @abstractmethod
    def find_by_rev_id(self, rev_id: int) -> list[VerificationHash]:
        raise NotImplementedError

    @abstractmethod
    def add(self, record: VerificationHash) -> None:
        raise NotImplementedError
