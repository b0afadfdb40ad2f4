from data_accounting.config.handler import ConfigStore
from data_accounting.config.layers import ConfigKeyError, DataAccountingConfig, MergedConfig
from data_accounting.config.runtime import RuntimeSettings

__all__ = [
    "ConfigKeyError",
    "ConfigStore",
    "DataAccountingConfig",
    "MergedConfig",
    "RuntimeSettings",
]
