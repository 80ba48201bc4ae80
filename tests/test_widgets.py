"""Tests for tui/widgets.py - rendering controller state as rich Text."""

from datetime import datetime

from tests.helpers import drive, type_text
from tudu.bus import MessageBus
from tudu.components import DueDatePicker, TaskEditor
from tudu.keys import KeyMap
from tudu.models import Task
from tudu.modes import Mode
from tudu.notification import FlashMessage
from tudu.tui.widgets import (
    render_detail,
    render_due_date,
    render_editor,
    render_finder,
    render_flash,
    render_task_list,
)


class TestRenderTaskList:
    """Tests for the task list rendering."""

    def test_empty(self, make_controller) -> None:
        assert "No todos" in render_task_list(make_controller()).plain

    def test_markers(self, make_controller) -> None:
        controller = make_controller("Buy milk")
        controller.tasks.append(Task("Pay rent", completed=True))
        controller.tasks.append(Task("Water plants", recurring=True))
        assert render_task_list(controller).plain.splitlines() == [
            "[ ] Buy milk",
            "[x] Pay rent",
            "[∞] Water plants",
        ]

    def test_selected_row_is_highlighted(self, make_controller) -> None:
        controller = make_controller("a", "b")
        text = render_task_list(controller)
        styles = [str(span.style) for span in text.spans]
        assert "bold reverse" in styles


class TestRenderDetail:
    """Tests for the detail panel rendering."""

    def test_nothing_selected(self) -> None:
        assert render_detail(None).plain == ""

    def test_description_and_metadata(self) -> None:
        task = Task("Pay rent", "by card", created_at=datetime(2026, 3, 1, 8, 0))
        plain = render_detail(task).plain
        assert "Pay rent" in plain
        assert "by card" in plain
        assert "Added: 03/01/26 08:00 AM" in plain
        assert "Edited:" not in plain


class TestRenderFinder:
    """Tests for the fuzzy finder rendering."""

    def test_highlights_matched_positions(self, make_controller) -> None:
        controller = make_controller("Buy milk", "Call mom")
        drive(controller, "f")
        type_text(controller, "bm")
        text = render_finder(controller.finder)
        assert controller.mode is Mode.FIND
        assert "Buy milk" in text.plain
        line_start = text.plain.index("Buy milk")
        highlighted = sorted(
            span.start - line_start for span in text.spans if str(span.style) == "bold magenta"
        )
        assert highlighted == [0, 4]

    def test_no_matches(self, make_controller) -> None:
        controller = make_controller("Buy milk")
        drive(controller, "f")
        type_text(controller, "zzz")
        assert "No matches" in render_finder(controller.finder).plain


class TestRenderEditorAndDueDate:
    """Tests for the editor and calendar rendering."""

    def test_editor_fields(self) -> None:
        editor = TaskEditor(KeyMap(), MessageBus())
        editor.populate_with(Task("Pay rent", "by card\nbefore noon", recurring=True), 0)
        plain = render_editor(editor).plain
        assert "Name: Pay rent" in plain
        assert "Description: by card" in plain
        assert "before noon" not in plain
        assert "Recurring: yes" in plain
        assert "Due: none" in plain

    def test_calendar_page(self) -> None:
        picker = DueDatePicker(KeyMap(), MessageBus())
        picker.prepare(Mode.ADD_TASK, None, now=datetime(2026, 1, 31, 9, 5))
        plain = render_due_date(picker).plain
        lines = plain.splitlines()
        assert lines[0].startswith("January 2026")
        assert lines[1] == "Mo Tu We Th Fr Sa Su"
        assert lines[2] == "          1  2  3  4"
        assert "Time: 09:05" in plain

    def test_selected_day_is_highlighted_in_its_grid_cell(self) -> None:
        picker = DueDatePicker(KeyMap(), MessageBus())
        picker.prepare(Mode.ADD_TASK, None, now=datetime(2026, 1, 31, 9, 5))
        assert (picker.day_cursor.row, picker.day_cursor.column) == (4, 5)

        text = render_due_date(picker)
        highlighted = [text.plain[s.start : s.end] for s in text.spans if s.style == "reverse"]
        assert highlighted[0] == "31"
        assert text.plain.splitlines()[6] == "26 27 28 29 30 31"


class TestRenderFlash:
    """Tests for the flash bar rendering."""

    def test_empty(self) -> None:
        assert render_flash(None).plain == ""

    def test_severity_style(self) -> None:
        text = render_flash(FlashMessage.error("Failed to save todos"))
        assert text.plain == "Failed to save todos"
        assert str(text.style) == "bold red"
