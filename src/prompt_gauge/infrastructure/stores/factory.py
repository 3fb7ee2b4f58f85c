"""
Store factory

Creates the history and config stores selected by the storage configuration.
"""

from __future__ import annotations

from prompt_gauge.infrastructure.stores.base import ConfigStore, HistoryStore
from prompt_gauge.infrastructure.stores.json_file import JsonFileConfigStore, JsonFileHistoryStore
from prompt_gauge.infrastructure.stores.memory import InMemoryConfigStore, InMemoryHistoryStore
from prompt_gauge.scoring_config import EngineConfig, StorageConfig, load_config

_BACKENDS = ("json", "memory")


def _storage_config(config: EngineConfig | None) -> StorageConfig:
    if config is None:
        config = load_config()
    storage = config.storage
    if storage.backend not in _BACKENDS:
        raise ValueError(f"Unknown storage backend: {storage.backend} (available: {list(_BACKENDS)})")
    return storage


def create_history_store(config: EngineConfig | None = None) -> HistoryStore:
    """
    Create the history store for the configured backend

    Args:
        config: EngineConfig (loads from env if not provided)

    Returns:
        HistoryStore
    """
    storage = _storage_config(config)
    if storage.backend == "memory":
        return InMemoryHistoryStore(max_entries=storage.history_limit)
    return JsonFileHistoryStore(storage.directory, max_entries=storage.history_limit)


def create_config_store(config: EngineConfig | None = None) -> ConfigStore:
    """Create the config override store for the configured backend"""
    storage = _storage_config(config)
    if storage.backend == "memory":
        return InMemoryConfigStore()
    return JsonFileConfigStore(storage.directory)
