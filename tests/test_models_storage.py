"""Tests for models.py and storage.py - tasks and their JSON file."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from tudu.errors import RecurringTaskError, StorageError
from tudu.models import Task
from tudu.storage import FORMAT_VERSION, TaskStore, validate_document

CREATED = datetime(2026, 3, 1, 8, 0)


class TestTask:
    """Tests for the Task model."""

    def test_defaults(self) -> None:
        task = Task("Buy milk")
        assert task.description == ""
        assert task.completed is False
        assert task.recurring is False
        assert task.due_at is None
        assert task.edited_at is None

    def test_toggle_round_trip(self) -> None:
        task = Task("Buy milk")
        assert task.toggle_completed() is True
        assert task.toggle_completed() is False
        assert task.completed is False

    def test_recurring_cannot_be_completed(self) -> None:
        task = Task("Water plants", recurring=True)
        with pytest.raises(RecurringTaskError):
            task.toggle_completed()
        assert task.completed is False

    def test_merge_keeps_creation_and_completion(self) -> None:
        original = Task("Buy milk", completed=True, created_at=CREATED)
        edited = Task("Buy oat milk", description="2 litres")
        now = datetime(2026, 3, 2, 9, 0)

        merged = edited.merged_into(original, now)

        assert merged.name == "Buy oat milk"
        assert merged.description == "2 litres"
        assert merged.created_at == CREATED
        assert merged.completed is True
        assert merged.edited_at == now

    def test_merge_into_recurring_clears_completion(self) -> None:
        original = Task("Water plants", completed=True, created_at=CREATED)
        merged = Task("Water plants", recurring=True).merged_into(original)
        assert merged.completed is False
        assert merged.recurring is True

    def test_metadata_rows(self) -> None:
        task = Task("x", created_at=CREATED, due_at=datetime(2026, 3, 5, 17, 30))
        rows = dict(task.metadata_rows())
        assert rows["Added"] == "03/01/26 08:00 AM"
        assert rows["Edited"] == ""
        assert rows["Due"] == "03/05/26 05:30 PM"
        assert rows["Recurring"] == "no"

    def test_to_dict_omits_unset_timestamps(self) -> None:
        data = Task("x", created_at=CREATED).to_dict()
        assert "due_at" not in data
        assert "edited_at" not in data
        assert data["created_at"] == "2026-03-01T08:00:00"

    def test_from_dict_never_loads_completed_recurring(self) -> None:
        task = Task.from_dict({"name": "x", "completed": True, "recurring": True})
        assert task.completed is False

    def test_from_dict_tolerates_bad_timestamps(self) -> None:
        task = Task.from_dict({"name": "x", "due_at": "tomorrow"})
        assert task.due_at is None


class TestValidateDocument:
    """Tests for schema validation."""

    def test_valid(self) -> None:
        valid, msg = validate_document({"version": "1.0", "todos": [{"name": "x"}]})
        assert valid
        assert msg == ""

    def test_missing_todos(self) -> None:
        valid, msg = validate_document({"version": "1.0"})
        assert not valid
        assert "todos" in msg

    def test_error_path_is_reported(self) -> None:
        valid, msg = validate_document({"version": "1.0", "todos": [{"description": "no name"}]})
        assert not valid
        assert "todos -> 0" in msg


class TestTaskStore:
    """Tests for TaskStore load/save."""

    def test_missing_file_loads_empty(self, store: TaskStore) -> None:
        assert store.load() == []

    def test_save_then_load(self, store: TaskStore) -> None:
        tasks = [
            Task("Buy milk", created_at=CREATED),
            Task("Water plants", recurring=True, created_at=CREATED),
            Task("Pay rent", completed=True, due_at=datetime(2026, 4, 1, 9, 0), created_at=CREATED),
        ]
        store.save(tasks)
        assert store.load() == tasks

    def test_saved_document_shape(self, store: TaskStore) -> None:
        store.save([Task("Buy milk")])
        data = json.loads(store.path.read_text())
        assert data["version"] == FORMAT_VERSION
        assert "updated_at" in data
        assert [t["name"] for t in data["todos"]] == ["Buy milk"]

    def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        store = TaskStore(tmp_path / "nested" / "dir" / "todos.json")
        store.save([])
        assert store.path.exists()

    def test_save_leaves_no_temp_files(self, store: TaskStore) -> None:
        store.save([Task("a")])
        store.save([Task("b")])
        assert [p.name for p in store.path.parent.iterdir()] == ["todos.json"]

    def test_corrupt_json_raises(self, store: TaskStore) -> None:
        store.path.write_text("{not json")
        with pytest.raises(StorageError):
            store.load()

    def test_non_object_raises(self, store: TaskStore) -> None:
        store.path.write_text("[]")
        with pytest.raises(StorageError):
            store.load()

    def test_schema_violation_raises(self, store: TaskStore) -> None:
        store.path.write_text(json.dumps({"version": "1.0", "todos": [{"completed": True}]}))
        with pytest.raises(StorageError, match="Invalid todo file"):
            store.load()

    def test_unwritable_path_raises(self, tmp_path: Path) -> None:
        target = tmp_path / "todos.json"
        target.mkdir()
        with pytest.raises(StorageError, match="Cannot write"):
            TaskStore(target).save([Task("x")])
