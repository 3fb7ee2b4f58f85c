"""
Store base classes

Defines the abstract history and config stores injected into the scoring service
and the HTTP API.
"""

from abc import ABC, abstractmethod

from prompt_gauge.domain.entities import ScoringHistoryEntry


class StoreError(Exception):
    """Error raised when a store cannot be read or written"""
    pass


class HistoryStore(ABC):
    """Capped, append-ordered list of history entries"""

    @abstractmethod
    def append(self, entry: ScoringHistoryEntry) -> None:
        """Append an entry (oldest entries beyond the cap are dropped)"""
        pass

    @abstractmethod
    def list(self, limit: int | None = None) -> list[ScoringHistoryEntry]:
        """Return the most recent `limit` entries in append order (all when limit is falsy)"""
        pass

    @abstractmethod
    def update(self, entry_id: str, patch: dict) -> bool:
        """
        Replace fields of an entry

        Args:
            entry_id: Entry ID
            patch: Field name -> new value (e.g. {"user_feedback": UserFeedback(...)})

        Returns:
            True if the entry was found
        """
        pass


class ConfigStore(ABC):
    """Single keyed scoring config override document"""

    @abstractmethod
    def get(self) -> dict | None:
        """Return the stored override (None when unset)"""
        pass

    @abstractmethod
    def set(self, override: dict) -> None:
        """Store the override"""
        pass
