"""Tests for the file key-value store and blob task repository."""

import json
from datetime import date, time
from unittest.mock import MagicMock

import pytest

from taskroutine.adapters.blob_task_repo import TASKS_KEY, BlobTaskRepository
from taskroutine.adapters.file_kv_store import FileKeyValueStore
from taskroutine.core.errors import StorageError
from taskroutine.core.tasks import Task


@pytest.fixture
def store(tmp_path):
    return FileKeyValueStore(tmp_path / "data")


@pytest.fixture
def tasks():
    return (
        Task(id="1", title="One", date=date(2025, 1, 15), time=time(9, 0)),
        Task(id="2", title="Two", date=date(2025, 1, 16), time=time(21, 0), completed=True),
    )


class TestFileKeyValueStore:
    def test_creates_data_dir(self, tmp_path):
        FileKeyValueStore(tmp_path / "nested" / "data")
        assert (tmp_path / "nested" / "data").is_dir()

    def test_missing_key_is_none(self, store):
        assert store.get("tasks") is None

    def test_set_then_get(self, store):
        store.set("tasks", "[]")
        assert store.get("tasks") == "[]"
        assert (store.data_dir / "tasks.json").read_text() == "[]"

    def test_overwrite(self, store):
        store.set("tasks", "[1]")
        store.set("tasks", "[2]")
        assert store.get("tasks") == "[2]"

    def test_survives_restart(self, store):
        store.set("tasks", '["x"]')
        assert FileKeyValueStore(store.data_dir).get("tasks") == '["x"]'

    def test_no_temp_files_left(self, store):
        store.set("tasks", "[]")
        assert store.keys() == ["tasks"]
        assert not list(store.data_dir.glob("*.tmp"))

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    def test_rejects_bad_keys(self, store, key):
        with pytest.raises(ValueError):
            store.get(key)

    def test_read_error_is_storage_error(self, store):
        (store.data_dir / "tasks.json").mkdir()
        with pytest.raises(StorageError):
            store.get("tasks")

    def test_undecodable_bytes_are_storage_error(self, store):
        (store.data_dir / "tasks.json").write_bytes(b"\xff\xfe[garbage")
        with pytest.raises(StorageError):
            store.get("tasks")

    def test_write_error_is_storage_error(self, store):
        (store.data_dir / "tasks.json").mkdir()
        with pytest.raises(StorageError):
            store.set("tasks", "[]")


class TestBlobTaskRepository:
    def test_first_load_is_empty(self, store):
        assert BlobTaskRepository(store).load() == ()

    def test_save_then_load(self, store, tasks):
        repo = BlobTaskRepository(store)
        repo.save(tasks)
        assert repo.load() == tasks
        assert BlobTaskRepository(FileKeyValueStore(store.data_dir)).load() == tasks

    def test_uses_tasks_key(self, store, tasks):
        BlobTaskRepository(store).save(tasks)
        assert store.keys() == [TASKS_KEY]

    def test_corrupt_blob_loads_empty(self, store):
        store.set("tasks", "{not json")
        assert BlobTaskRepository(store).load() == ()

    def test_undecodable_blob_loads_empty(self, store):
        (store.data_dir / "tasks.json").write_bytes(b"\xff\xfe[garbage")
        assert BlobTaskRepository(store).load() == ()

    def test_non_bool_completed_record_is_skipped(self, store, tasks):
        records = [t.to_record() for t in tasks]
        records[0]["completed"] = "false"
        store.set("tasks", json.dumps(records))
        assert BlobTaskRepository(store).load() == tasks[1:]

    def test_load_error_is_swallowed(self):
        kv = MagicMock()
        kv.get.side_effect = StorageError("disk gone")
        assert BlobTaskRepository(kv).load() == ()

    def test_save_error_is_swallowed(self, tasks):
        kv = MagicMock()
        kv.set.side_effect = StorageError("disk full")
        BlobTaskRepository(kv).save(tasks)
        kv.set.assert_called_once()
