from __future__ import annotations

from abc import ABC, abstractmethod


class SettingsRepository(ABC):
    """Persisted configuration layer. Values are JSON-encoded strings."""

    @abstractmethod
    def table_exists(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def fetch_all(self) -> dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def exists(self, name: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def update(self, name: str, encoded_value: str) -> int:
        """Return the number of affected rows."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, name: str, encoded_value: str) -> int:
        raise NotImplementedError
