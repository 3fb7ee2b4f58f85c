"""
In-memory stores

Process-local implementations, lost on restart.
"""

import copy
from dataclasses import replace

from prompt_gauge.domain.constants import HISTORY_LIMIT
from prompt_gauge.domain.entities import ScoringHistoryEntry
from prompt_gauge.infrastructure.stores.base import ConfigStore, HistoryStore


class InMemoryHistoryStore(HistoryStore):
    """History kept in a Python list"""

    def __init__(self, max_entries: int = HISTORY_LIMIT) -> None:
        self.max_entries = max_entries
        self._entries: list[ScoringHistoryEntry] = []

    def append(self, entry: ScoringHistoryEntry) -> None:
        self._entries.append(entry)
        self._entries = self._entries[-self.max_entries:]

    def list(self, limit: int | None = None) -> list[ScoringHistoryEntry]:
        return list(self._entries[-limit:]) if limit else list(self._entries)

    def update(self, entry_id: str, patch: dict) -> bool:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                self._entries[i] = replace(entry, **patch)
                return True
        return False


class InMemoryConfigStore(ConfigStore):
    """Config override kept in process memory"""

    def __init__(self) -> None:
        self._override: dict | None = None

    def get(self) -> dict | None:
        return copy.deepcopy(self._override)

    def set(self, override: dict) -> None:
        self._override = copy.deepcopy(override)
