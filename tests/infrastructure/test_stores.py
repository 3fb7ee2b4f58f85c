"""
History / config store tests
"""

import json

import pytest

from prompt_gauge.domain.entities import ScoringHistoryEntry, UserFeedback
from prompt_gauge.infrastructure.stores import (
    InMemoryConfigStore,
    InMemoryHistoryStore,
    JsonFileConfigStore,
    JsonFileHistoryStore,
    StoreError,
    create_config_store,
    create_history_store,
)
from prompt_gauge.scoring_config import EngineConfig, StorageConfig
from prompt_gauge.use_cases.analysis import ScoringService

_ANALYSIS = ScoringService().analyze_improvement("코드를 작성해줘", "Python으로 정렬 함수를 구현하세요")


def _entry(entry_id: str) -> ScoringHistoryEntry:
    return ScoringHistoryEntry(
        id=entry_id,
        session_id="session_1",
        analysis=_ANALYSIS,
        created_at="2026-01-01T00:00:00",
    )


@pytest.fixture(params=["memory", "json"])
def history_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryHistoryStore(max_entries=3)
    return JsonFileHistoryStore(tmp_path, max_entries=3)


class TestHistoryStores:
    """Behaviour shared by both history stores"""

    def test_empty(self, history_store):
        assert history_store.list() == []

    def test_append_and_list(self, history_store):
        history_store.append(_entry("a"))
        history_store.append(_entry("b"))
        assert [e.id for e in history_store.list()] == ["a", "b"]
        assert [e.id for e in history_store.list(1)] == ["b"]

    def test_oldest_dropped_over_limit(self, history_store):
        for entry_id in "abcd":
            history_store.append(_entry(entry_id))
        assert [e.id for e in history_store.list()] == ["b", "c", "d"]

    def test_update(self, history_store):
        history_store.append(_entry("a"))
        feedback = UserFeedback(is_accurate=True, comments="ok")
        assert history_store.update("a", {"user_feedback": feedback}) is True
        assert history_store.list()[0].user_feedback == feedback

    def test_update_missing(self, history_store):
        history_store.append(_entry("a"))
        assert history_store.update("zzz", {"user_feedback": UserFeedback(is_accurate=True)}) is False

    def test_default_limit_is_100(self):
        store = InMemoryHistoryStore()
        for i in range(101):
            store.append(_entry(str(i)))
        entries = store.list()
        assert len(entries) == 100
        assert entries[0].id == "1"


class TestJsonFileHistoryStore:
    """JSON file specifics"""

    def test_file_layout(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path)
        store.append(_entry("a"))

        assert store.path == tmp_path / "scoring_history.json"
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data[0]["id"] == "a"
        assert data[0]["analysis"]["originalPrompt"] == "코드를 작성해줘"

    def test_creates_directory(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path / "nested" / "dir")
        store.append(_entry("a"))
        assert store.path.exists()

    def test_persisted_across_instances(self, tmp_path):
        JsonFileHistoryStore(tmp_path).append(_entry("a"))
        assert JsonFileHistoryStore(tmp_path).list()[0].analysis == _ANALYSIS

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "scoring_history.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError):
            JsonFileHistoryStore(tmp_path).list()

    def test_unexpected_document(self, tmp_path):
        (tmp_path / "scoring_history.json").write_text('{"a": 1}', encoding="utf-8")
        with pytest.raises(StoreError, match="Unexpected history format"):
            JsonFileHistoryStore(tmp_path).list()

    def test_malformed_entry(self, tmp_path):
        (tmp_path / "scoring_history.json").write_text('[{"id": "a"}]', encoding="utf-8")
        with pytest.raises(StoreError, match="Malformed"):
            JsonFileHistoryStore(tmp_path).list()


class TestConfigStores:
    """Config override stores"""

    def test_memory_unset(self):
        assert InMemoryConfigStore().get() is None

    def test_memory_copies(self):
        store = InMemoryConfigStore()
        override = {"weights": {"clarity": 1.0}}
        store.set(override)
        override["weights"]["clarity"] = 0.0
        assert store.get() == {"weights": {"clarity": 1.0}}

    def test_json_roundtrip(self, tmp_path):
        store = JsonFileConfigStore(tmp_path)
        assert store.get() is None
        store.set({"excellentThreshold": 0.9})
        assert JsonFileConfigStore(tmp_path).get() == {"excellentThreshold": 0.9}
        assert store.path == tmp_path / "scoring_config.json"


class TestFactory:
    """create_history_store / create_config_store"""

    def test_memory_backend(self):
        config = EngineConfig(storage=StorageConfig(backend="memory", history_limit=5))
        store = create_history_store(config)
        assert isinstance(store, InMemoryHistoryStore)
        assert store.max_entries == 5
        assert isinstance(create_config_store(config), InMemoryConfigStore)

    def test_json_backend(self, tmp_path):
        config = EngineConfig(storage=StorageConfig(backend="json", directory=str(tmp_path)))
        store = create_history_store(config)
        assert isinstance(store, JsonFileHistoryStore)
        assert store.path == tmp_path / "scoring_history.json"
        assert isinstance(create_config_store(config), JsonFileConfigStore)

    def test_unknown_backend(self):
        config = EngineConfig(storage=StorageConfig(backend="redis"))
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_history_store(config)

    def test_loads_env_when_no_config(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PROMPT_GAUGE_STORAGE_BACKEND", "json")
        monkeypatch.setenv("PROMPT_GAUGE_STORAGE_DIR", str(tmp_path))
        store = create_history_store()
        assert store.path == tmp_path / "scoring_history.json"
