"""
tudu TUI application.

Every key press and every idle interval becomes one controller tick; the
screen is redrawn from the controller's state after each tick.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path

from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Header

from tudu.config import POLL_TIMEOUT, Settings
from tudu.controller import Controller, PollOutcome
from tudu.errors import BusClosedError
from tudu.keys import KeyPress
from tudu.models import Task
from tudu.notification import NotificationTimer
from tudu.storage import TaskStore
from tudu.tui.widgets import (
    DetailPanel,
    DueDatePanel,
    EditorPanel,
    FinderPanel,
    FlashBar,
    HintBar,
    TaskListPanel,
)

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"


class TodoScreen(Screen):
    """The only screen: list, detail, mode panels, flash and hints."""

    # All keys go to the controller, including tab.
    inherit_bindings = False

    DEFAULT_CSS = """
    TodoScreen #main {
        height: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            yield TaskListPanel(id="tasks")
            yield DetailPanel(id="detail")
        yield EditorPanel(id="editor")
        yield FinderPanel(id="finder")
        yield DueDatePanel(id="due-date")
        yield FlashBar(id="flash")
        yield HintBar(id="hints")

    def on_mount(self) -> None:
        self.refresh_from(self.app.controller)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.press_key(KeyPress(event.key, event.character))

    def refresh_from(self, controller: Controller) -> None:
        for panel in (TaskListPanel, DetailPanel, EditorPanel, FinderPanel, DueDatePanel):
            self.query_one(panel).show_from(controller)
        self.query_one(FlashBar).show_from(controller)
        self.query_one(HintBar).show_from(controller)


class TuduApp(App):
    """Main tudu application."""

    TITLE = "tudu"
    SUB_TITLE = "Todo list"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(
        self,
        controller: Controller,
        poll_timeout: float = POLL_TIMEOUT,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.controller = controller
        if controller.external_editor is None:
            controller.external_editor = self.edit_externally
        self._poll_timeout = poll_timeout
        self._tick_timer = None

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(TodoScreen())
        self._tick_timer = self.set_interval(self._poll_timeout, self.tick)

    def press_key(self, press: KeyPress) -> None:
        self.tick(press)

    def tick(self, press: KeyPress | None = None) -> None:
        """Run one controller tick and redraw."""
        try:
            outcome = self.controller.tick(press)
        except BusClosedError as e:
            logger.critical("Message bus failed: %s", e)
            self.exit(return_code=1, message=f"tudu: {e}")
            return

        if outcome is PollOutcome.QUIT:
            self.controller.shutdown()
            self.exit()
            return
        self.redraw()

    def redraw(self) -> None:
        if isinstance(self.screen, TodoScreen):
            self.screen.refresh_from(self.controller)

    def edit_externally(self, text: str) -> str:
        """Edit ``text`` in $VISUAL / $EDITOR with the UI suspended."""
        command = os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
        fd, name = tempfile.mkstemp(prefix="tudu-", suffix=".md")
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            try:
                with self.suspend():
                    subprocess.run([*shlex.split(command), str(path)], check=True)
            except SuspendNotSupported as e:
                raise OSError("terminal cannot be suspended") from e
            except subprocess.CalledProcessError as e:
                raise OSError(f"{command} exited with status {e.returncode}") from e
            return path.read_text(encoding="utf-8").rstrip("\n")
        finally:
            path.unlink(missing_ok=True)


def run(tasks: list[Task], store: TaskStore, settings: Settings) -> int:
    """Run the TUI application; returns the process exit status."""
    controller = Controller(
        tasks,
        store,
        notifications=NotificationTimer(settings.flash_seconds),
    )
    app = TuduApp(controller, poll_timeout=settings.poll_timeout)
    app.run()
    logger.info("Exited with status %s", app.return_code)
    return app.return_code or 0
