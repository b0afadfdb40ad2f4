"""Merged, read-only views over an ordered list of configuration layers."""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from data_accounting.results import ConfigurationError

if TYPE_CHECKING:
    from data_accounting.config.handler import ConfigStore


class ConfigKeyError(KeyError):
    pass


class MergedConfig(Mapping[str, Any]):
    """Snapshot of several layers; earlier layers take precedence."""

    def __init__(self, layers: list[Mapping[str, Any]]):
        self._layers = tuple(MappingProxyType(dict(layer)) for layer in layers)
        merged: dict[str, Any] = {}
        for layer in reversed(self._layers):
            merged.update(layer)
        self._merged = MappingProxyType(merged)

    @property
    def layers(self) -> tuple[Mapping[str, Any], ...]:
        return self._layers

    def __getitem__(self, name: str) -> Any:
        try:
            return self._merged[name]
        except KeyError:
            raise ConfigKeyError(f"No configuration value for '{name}'") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._merged)

    def __len__(self) -> int:
        return len(self._merged)

    def has(self, name: str) -> bool:
        return name in self._merged

    def as_dict(self) -> dict[str, Any]:
        return dict(self._merged)


class DataAccountingConfig(MergedConfig):
    """Merged config that writes through its store.

    ``set`` is the typed mutation entry point: a failing status from the
    store is raised as ``ConfigurationError``.
    """

    def __init__(self, layers: list[Mapping[str, Any]], store: "ConfigStore"):
        super().__init__(layers)
        self._store = store

    def set(self, name: str, value: Any) -> None:
        status = self._store.set(name, value)
        if not status.is_ok():
            raise ConfigurationError(status)
