"""
JSON file stores

Each store reads and writes one whole JSON document named after its storage key
(e.g. scoring_history.json). Writes go through a temporary file and an atomic
replace; concurrent writers are last-writer-wins.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path

from prompt_gauge.domain.constants import CONFIG_STORAGE_KEY, HISTORY_LIMIT, HISTORY_STORAGE_KEY
from prompt_gauge.domain.entities import ScoringHistoryEntry
from prompt_gauge.infrastructure.stores.base import ConfigStore, HistoryStore, StoreError

logger = logging.getLogger(__name__)


def _read_json(path: Path):
    """Read a JSON document (None when the file does not exist)"""
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StoreError(f"Failed to read {path}: {e}") from e


def _write_json(path: Path, data) -> None:
    """Write a JSON document atomically"""
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except OSError as e:
        raise StoreError(f"Failed to write {path}: {e}") from e


class JsonFileHistoryStore(HistoryStore):
    """History persisted as a whole-list JSON file"""

    def __init__(self, directory: str | Path, max_entries: int = HISTORY_LIMIT) -> None:
        self.path = Path(directory) / f"{HISTORY_STORAGE_KEY}.json"
        self.max_entries = max_entries

    def _load(self) -> list[dict]:
        data = _read_json(self.path)
        if data is None:
            return []
        if not isinstance(data, list):
            raise StoreError(f"Unexpected history format in {self.path}: {type(data).__name__}")
        return data

    def append(self, entry: ScoringHistoryEntry) -> None:
        history = self._load()
        history.append(entry.to_dict())
        _write_json(self.path, history[-self.max_entries:])
        logger.debug("Saved history entry %s to %s", entry.id, self.path)

    def list(self, limit: int | None = None) -> list[ScoringHistoryEntry]:
        history = self._load()
        if limit:
            history = history[-limit:]
        try:
            return [ScoringHistoryEntry.from_dict(item) for item in history]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed history entry in {self.path}: {e}") from e

    def update(self, entry_id: str, patch: dict) -> bool:
        history = self._load()
        for i, item in enumerate(history):
            if item.get("id") == entry_id:
                entry = replace(ScoringHistoryEntry.from_dict(item), **patch)
                history[i] = entry.to_dict()
                _write_json(self.path, history)
                return True
        return False


class JsonFileConfigStore(ConfigStore):
    """Config override persisted as a JSON file"""

    def __init__(self, directory: str | Path) -> None:
        self.path = Path(directory) / f"{CONFIG_STORAGE_KEY}.json"

    def get(self) -> dict | None:
        return _read_json(self.path)

    def set(self, override: dict) -> None:
        _write_json(self.path, override)
