"""Static defaults and the registered ``da`` settings.

Only names registered here can be overridden at runtime; the process-wide
layer built from them doubles as the allow-list for persisted overrides.
"""
from __future__ import annotations

import json
import logging
import os
import re
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "DA_"

REGISTERED_SETTINGS: Mapping[str, Any] = MappingProxyType({
    "DomainID": "",
    "WitnessNetwork": "sepolia",
    "SmartContractAddress": "",
    "InjectSignature": True,
    "ExposeVerificationHash": True,
})

HOST_DEFAULTS: Mapping[str, Any] = MappingProxyType({
    **REGISTERED_SETTINGS,
    "Sitename": "Data Accounting",
    "ServerName": "localhost",
})


def env_name(name: str) -> str:
    """``DomainID`` -> ``DA_DOMAIN_ID``."""
    snake = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    return ENV_PREFIX + snake.upper()


def _decode_env(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def process_settings(environ: Mapping[str, str] | None = None) -> Mapping[str, Any]:
    """Registered settings with ``DA_*`` environment overrides applied."""
    environ = os.environ if environ is None else environ
    values = dict(REGISTERED_SETTINGS)
    for name in REGISTERED_SETTINGS:
        raw = environ.get(env_name(name))
        if raw is not None:
            values[name] = _decode_env(raw)
            logger.debug("Setting %s overridden from %s", name, env_name(name))
    return MappingProxyType(values)
