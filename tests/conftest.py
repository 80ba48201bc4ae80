"""Shared fixtures for tudu tests."""

from pathlib import Path

import pytest

from tests.helpers import ManualScheduler
from tudu.controller import Controller
from tudu.models import Task
from tudu.notification import NotificationTimer
from tudu.storage import TaskStore


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "todos.json")


@pytest.fixture
def make_controller(store: TaskStore, scheduler: ManualScheduler):
    """Build a controller over the given task names with a manual timer."""

    def _make(*names: str, **kwargs) -> Controller:
        tasks = [Task(name) for name in names]
        kwargs.setdefault("notifications", NotificationTimer(1.0, scheduler))
        return Controller(tasks, kwargs.pop("store", store), **kwargs)

    return _make
