"""Layered verification settings: persisted > process-wide > static default.

The persisted layer lives in ``da_settings`` and is loaded lazily. Writes go
only to that layer and only for names registered in the process-wide layer.

The upsert is check-then-act and not atomic: two processes writing the same
new name can both see it absent, and the second insert fails with a
``DATABASE_ERROR`` status. The caller may retry; nothing here does.
"""
from __future__ import annotations

import json
import logging
from contextlib import AbstractContextManager
from typing import Any, Callable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from data_accounting.config.defaults import HOST_DEFAULTS, process_settings
from data_accounting.config.layers import DataAccountingConfig
from data_accounting.results import ErrorKind, Status
from data_accounting.services.interfaces import SettingsRepository

logger = logging.getLogger(__name__)

RepositoryScope = Callable[[], AbstractContextManager[SettingsRepository]]


def _storage_message(exc: SQLAlchemyError) -> str:
    """Driver message without the statement and bound parameters."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class ConfigStore:
    def __init__(
        self,
        repository_scope: RepositoryScope,
        process_layer: Mapping[str, Any] | None = None,
        default_layer: Mapping[str, Any] | None = None,
    ):
        self._repository_scope = repository_scope
        self._process_layer = process_settings() if process_layer is None else process_layer
        self._default_layer = HOST_DEFAULTS if default_layer is None else default_layer
        self._database_layer: dict[str, Any] | None = None
        self._config: DataAccountingConfig | None = None

    def get_config(self) -> DataAccountingConfig:
        if self._config is None:
            self._config = self._make_config()
        return self._config

    def get(self, name: str, default: Any = None) -> Any:
        return self.get_config().get(name, default)

    def set(self, name: str, value: Any) -> Status:
        status = Status.good()
        if name not in self._process_layer:
            status.fatal(
                ErrorKind.UNKNOWN_CONFIG_KEY,
                f"The config '{name}' does not exist within the da config prefix",
            )
            return status

        status.merge(self._set_database_config(name, value))
        if status.is_ok():
            status.merge(self._reload_database_layer())
        if status.is_ok():
            logger.info("Setting %s updated", name)
        else:
            logger.warning("Setting %s not updated: %s", name, status.message)
        return status

    def _make_config(self) -> DataAccountingConfig:
        if self._database_layer is None:
            self._database_layer = self._load_database_layer()
        return DataAccountingConfig(
            [self._database_layer, self._process_layer, self._default_layer],
            self,
        )

    def _load_database_layer(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        with self._repository_scope() as repo:
            # The table is missing until the upgrade that adds it has run.
            if not repo.table_exists():
                logger.info("da_settings table not found, using process-wide settings only")
                return values
            for name, encoded in repo.fetch_all().items():
                try:
                    values[name] = json.loads(encoded)
                except ValueError:
                    logger.warning("Setting %s holds invalid JSON, reading it as null", name)
                    values[name] = None
        return values

    def _reload_database_layer(self) -> Status:
        status = Status.good()
        self._config = None
        try:
            self._database_layer = self._load_database_layer()
        except SQLAlchemyError as exc:
            # Written but not re-read; the next get_config retries the load.
            self._database_layer = None
            status.fatal(ErrorKind.DATABASE_ERROR, _storage_message(exc))
        return status

    def _set_database_config(self, name: str, value: Any) -> Status:
        status = Status.good()
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as exc:
            status.fatal(ErrorKind.INVALID_PARAMETER, f"Value for '{name}' is not JSON-encodable: {exc}")
            return status

        try:
            with self._repository_scope() as repo:
                if repo.exists(name):
                    affected = repo.update(name, encoded)
                else:
                    affected = repo.insert(name, encoded)
            if not affected:
                status.fatal(ErrorKind.DATABASE_ERROR, "Unknown Database error")
        except SQLAlchemyError as exc:
            status.fatal(ErrorKind.DATABASE_ERROR, _storage_message(exc))
        return status
