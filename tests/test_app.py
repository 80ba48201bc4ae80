"""Tests for the Textual shell, driven through the pilot."""

import asyncio
import shlex
import sys
import tempfile
from contextlib import nullcontext
from pathlib import Path

import pytest
from textual.app import SuspendNotSupported

from tudu.controller import Controller
from tudu.models import Task
from tudu.modes import Mode
from tudu.storage import TaskStore
from tudu.tui.app import TodoScreen, TuduApp
from tudu.tui.widgets import DueDatePanel, EditorPanel, FinderPanel, TaskListPanel


def make_app(tmp_path: Path, *names: str) -> TuduApp:
    store = TaskStore(tmp_path / "todos.json")
    controller = Controller([Task(n) for n in names], store)
    # Idle ticks are not needed; key presses tick the controller.
    return TuduApp(controller, poll_timeout=60)


class TestTuduApp:
    """End-to-end scenarios through the app."""

    def test_add_todo(self, tmp_path: Path) -> None:
        app = make_app(tmp_path)

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.press("a")
                assert app.controller.mode is Mode.ADD_TASK
                await pilot.press("b", "u", "y", "space", "m", "i", "l", "k", "enter")
                await pilot.pause()
                assert isinstance(app.screen, TodoScreen)
                assert not app.screen.query_one(EditorPanel).display

        asyncio.run(scenario())

        assert [t.name for t in app.controller.tasks] == ["buy milk"]
        assert [t.name for t in TaskStore(tmp_path / "todos.json").load()] == ["buy milk"]

    def test_tab_reaches_controller(self, tmp_path: Path) -> None:
        app = make_app(tmp_path, "Buy milk", "Call mom")

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.press("f", "tab")
                assert app.controller.mode is Mode.FIND
                assert app.controller.finder.cursor.selected == 1

        asyncio.run(scenario())

    def test_panels_follow_mode(self, tmp_path: Path) -> None:
        app = make_app(tmp_path, "Buy milk")

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                screen = app.screen
                assert screen.query_one(TaskListPanel).display
                assert not screen.query_one(FinderPanel).display

                await pilot.press("f")
                assert screen.query_one(FinderPanel).display
                assert screen.query_one(TaskListPanel).has_class("dimmed")

                await pilot.press("escape", "a", "ctrl+d")
                assert screen.query_one(DueDatePanel).display
                assert screen.query_one(EditorPanel).has_class("dimmed")

        asyncio.run(scenario())

    def test_quit(self, tmp_path: Path) -> None:
        app = make_app(tmp_path, "Buy milk")

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.press("q")
                await pilot.pause()

        asyncio.run(scenario())
        assert app.return_code == 0
        assert app.controller.bus.closed

    def test_closed_bus_exits_with_status_1(self, tmp_path: Path) -> None:
        app = make_app(tmp_path, "Buy milk")

        async def scenario() -> None:
            async with app.run_test() as pilot:
                app.controller.bus.close()
                await pilot.press("a")
                await pilot.pause()

        asyncio.run(scenario())
        assert app.return_code == 1


class TestExternalEditor:
    """Tests for editing a description in $VISUAL / $EDITOR."""

    @pytest.fixture
    def temp_files(self, monkeypatch) -> list[Path]:
        created: list[Path] = []
        real_mkstemp = tempfile.mkstemp

        def recording_mkstemp(*args, **kwargs):
            fd, name = real_mkstemp(*args, **kwargs)
            created.append(Path(name))
            return fd, name

        monkeypatch.setattr(tempfile, "mkstemp", recording_mkstemp)
        return created

    @staticmethod
    def use_editor(monkeypatch, script: str) -> None:
        monkeypatch.delenv("VISUAL", raising=False)
        monkeypatch.setenv("EDITOR", f"{shlex.quote(sys.executable)} -c {shlex.quote(script)}")

    def test_returns_edited_text(self, tmp_path: Path, monkeypatch, temp_files) -> None:
        app = make_app(tmp_path)
        monkeypatch.setattr(app, "suspend", nullcontext)
        self.use_editor(
            monkeypatch,
            "import sys; p = sys.argv[1]; t = open(p).read(); open(p, 'w').write(t + ' at noon\\n')",
        )

        assert app.edit_externally("Call mom") == "Call mom at noon"
        assert len(temp_files) == 1
        assert not temp_files[0].exists()

    def test_failing_editor_raises_os_error(self, tmp_path: Path, monkeypatch, temp_files) -> None:
        app = make_app(tmp_path)
        monkeypatch.setattr(app, "suspend", nullcontext)
        self.use_editor(monkeypatch, "import sys; sys.exit(3)")

        with pytest.raises(OSError, match="status 3"):
            app.edit_externally("Call mom")
        assert not temp_files[0].exists()

    def test_unsuspendable_terminal_raises_os_error(
        self, tmp_path: Path, monkeypatch, temp_files
    ) -> None:
        app = make_app(tmp_path)

        def refuse_suspend():
            raise SuspendNotSupported("no suspend")

        monkeypatch.setattr(app, "suspend", refuse_suspend)

        with pytest.raises(OSError, match="cannot be suspended"):
            app.edit_externally("Call mom")
        assert not temp_files[0].exists()

    def test_wired_into_controller(self, tmp_path: Path) -> None:
        app = make_app(tmp_path)
        assert app.controller.external_editor == app.edit_externally
