import json

import pytest

from core.database import (
    JsonFileStore, MemoryStore, StorageError, TrackerDatabase, TrackerState
)
from core.models import CategoryLog, Task, TaskLog, Theme


class TestTrackerDatabaseReads:

    def test_empty_store_gives_defaults(self, database):
        state = database.load()
        assert state.records.records == {}
        assert len(state.tasks) == 0
        assert state.theme is Theme.DARK

    def test_invalid_json_falls_back(self):
        store = MemoryStore({"dsa_records": "{not json", "dsa_tasks": "[", "dsa_theme": "light"})
        state = TrackerDatabase(store).load()
        assert state.records.records == {}
        assert len(state.tasks) == 0
        # theme is stored as a JSON string, a bare word is not valid JSON
        assert state.theme is Theme.DARK

    def test_wrong_shape_falls_back(self):
        store = MemoryStore({
            "dsa_records": json.dumps(["2024-03-15"]),
            "dsa_tasks": json.dumps({"id": "1"}),
            "dsa_theme": json.dumps(3),
        })
        state = TrackerDatabase(store).load()
        assert state.records.records == {}
        assert len(state.tasks) == 0
        assert state.theme is Theme.DARK

    def test_unknown_theme_falls_back(self):
        store = MemoryStore({"dsa_theme": json.dumps("neon")})
        assert TrackerDatabase(store).load_theme() is Theme.DARK

    def test_reads_stored_layout(self):
        store = MemoryStore({
            "dsa_records": json.dumps({"2024-03-15": {"dsa": True, "cs": False}}),
            "dsa_tasks": json.dumps([{
                "id": "a1", "title": "Two Sum", "difficulty": "Easy", "category": "DSA",
                "note": "", "done": True, "addedOn": "2024-03-14", "solvedOn": "2024-03-15",
            }]),
            "dsa_theme": json.dumps("light"),
        })
        state = TrackerDatabase(store).load()
        assert state.records.completed_on("2024-03-15") == ["dsa"]
        assert state.tasks.get("a1").solved_on == "2024-03-15"
        assert state.theme is Theme.LIGHT

    def test_today_backs_tasks_without_a_date(self):
        store = MemoryStore({"dsa_tasks": json.dumps([{"id": "1", "title": "A", "addedOn": "tbd"}])})
        assert len(TrackerDatabase(store).load().tasks) == 0
        assert TrackerDatabase(store).load("2024-03-15").tasks.get("1").added_on == "2024-03-15"

    def test_custom_keys(self):
        store = MemoryStore({"prep_theme": json.dumps("light")})
        database = TrackerDatabase(store, theme_key="prep_theme")
        assert database.load_theme() is Theme.LIGHT


class TestTrackerDatabaseWrites:

    def test_save_then_load(self, store):
        database = TrackerDatabase(store)
        records = CategoryLog({"2024-03-15": {"mock": True}})
        tasks = TaskLog([Task("a1", "LRU Cache", "Medium", "DSA", added_on="2024-03-15")])

        assert database.save(TrackerState(records, tasks, Theme.LIGHT)) is True
        assert database.save_count == 3

        reloaded = TrackerDatabase(store).load()
        assert reloaded.records.to_dict() == records.to_dict()
        assert reloaded.tasks.to_list() == tasks.to_list()
        assert reloaded.theme is Theme.LIGHT

    def test_write_failure_is_swallowed(self, failing_store):
        database = TrackerDatabase(failing_store)
        assert database.save_theme(Theme.LIGHT) is False
        assert database.save(TrackerState()) is False
        assert database.error_count == 4
        assert database.get_stats()["store"] == "FailingStore"


class TestJsonFileStore:

    def test_missing_file_reads_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "store.json")
        assert store.get_item("dsa_records") is None

    def test_set_get_remove(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = JsonFileStore(path)
        store.set_item("dsa_theme", '"light"')
        store.set_item("dsa_records", "{}")

        assert path.exists()
        assert not path.with_suffix(".json.tmp").exists()
        assert JsonFileStore(path).get_item("dsa_theme") == '"light"'

        store.remove_item("dsa_theme")
        assert store.get_item("dsa_theme") is None
        assert store.get_item("dsa_records") == "{}"

    def test_corrupted_file_is_moved_aside(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{ definitely not json", encoding="utf-8")

        store = JsonFileStore(path)
        assert store.get_item("dsa_records") is None
        assert not path.exists()
        assert len(list(tmp_path.glob("store.json.corrupted-*"))) == 1

    def test_non_object_file_is_moved_aside(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonFileStore(path).get_item("x") is None
        assert len(list(tmp_path.glob("store.json.corrupted-*"))) == 1

    def test_database_over_file_store(self, tmp_path):
        path = tmp_path / "store.json"
        database = TrackerDatabase(JsonFileStore(path))
        database.save_records(CategoryLog({"2024-02-29": {"dsa": True}}))

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert json.loads(raw["dsa_records"]) == {"2024-02-29": {"dsa": True}}
        assert TrackerDatabase(JsonFileStore(path)).load_records().count_on("2024-02-29") == 1

    def test_unwritable_target_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonFileStore(blocker / "store.json")
        with pytest.raises(StorageError):
            store.set_item("k", "v")
