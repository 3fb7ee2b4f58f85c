from prompt_gauge.infrastructure.stores.base import ConfigStore, HistoryStore, StoreError
from prompt_gauge.infrastructure.stores.memory import InMemoryConfigStore, InMemoryHistoryStore
from prompt_gauge.infrastructure.stores.json_file import JsonFileConfigStore, JsonFileHistoryStore
from prompt_gauge.infrastructure.stores.factory import create_config_store, create_history_store

__all__ = [
    "ConfigStore",
    "HistoryStore",
    "StoreError",
    "InMemoryConfigStore",
    "InMemoryHistoryStore",
    "JsonFileConfigStore",
    "JsonFileHistoryStore",
    "create_config_store",
    "create_history_store",
]
