"""Panels that render the controller's state."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from tudu.components import DueDatePicker, FuzzyFinder, TaskEditor
from tudu.components.due_date import DueDateFocus, PickerFocus
from tudu.controller import Controller
from tudu.models import Task
from tudu.modes import Mode, View
from tudu.notification import FlashMessage, Severity

SEVERITY_STYLES = {
    Severity.INFO: "bold green",
    Severity.WARN: "bold yellow",
    Severity.ERROR: "bold red",
}

WEEKDAYS = "Mo Tu We Th Fr Sa Su"


def task_marker(task: Task) -> str:
    if task.recurring:
        return "[∞]"
    return "[x]" if task.completed else "[ ]"


def render_task_list(controller: Controller) -> Text:
    text = Text()
    if not controller.tasks:
        text.append("No todos. Press a to add one.", style="dim")
        return text

    selected = controller.task_list.selected
    moving = controller.mode is Mode.MOVE
    for i, task in enumerate(controller.tasks):
        if i:
            text.append("\n")
        style = ""
        if task.completed:
            style = "dim strike"
        if i == selected:
            style = "bold reverse yellow" if moving else "bold reverse"
        text.append(f"{task_marker(task)} {task.name}", style=style)
    return text


def render_detail(task: Task | None) -> Text:
    text = Text()
    if task is None:
        return text
    text.append(task.name or "(unnamed)", style="bold")
    text.append("\n\n")
    text.append(task.description or "No description", style="" if task.description else "dim")
    text.append("\n\n")
    for label, value in task.metadata_rows():
        if value:
            text.append(f"{label}: ", style="bold")
            text.append(f"{value}\n")
    return text


def render_editor(editor: TaskEditor) -> Text:
    name = editor.name
    text = Text()
    text.append("Name: ", style="bold")
    text.append(name.value[: name.cursor])
    cursor_char = name.value[name.cursor : name.cursor + 1] or " "
    text.append(cursor_char, style="reverse")
    text.append(name.value[name.cursor + 1 :])
    text.append("\n")
    text.append("Description: ", style="bold")
    text.append(editor.description.splitlines()[0] if editor.description else "", style="italic")
    text.append("\n")
    text.append("Recurring: ", style="bold")
    text.append("yes" if editor.recurring else "no")
    text.append("\n")
    text.append("Due: ", style="bold")
    text.append(f"{editor.due_at:%Y-%m-%d %H:%M}" if editor.due_at else "none")
    return text


def render_finder(finder: FuzzyFinder) -> Text:
    text = Text()
    text.append("Find: ", style="bold")
    text.append(finder.query.value)
    text.append(" ", style="reverse")
    if not finder.matches:
        text.append("\nNo matches", style="dim")
        return text

    for i, match in enumerate(finder.matches):
        line = Text(match.text)
        for pos in match.positions:
            line.stylize("bold magenta", pos, pos + 1)
        if i == finder.cursor.selected:
            line.stylize("reverse")
        text.append("\n")
        text.append(line)
    return text


def render_due_date(picker: DueDatePicker) -> Text:
    month = picker.month
    calendar_focused = picker.focus is DueDateFocus.CALENDAR
    text = Text()
    text.append(f"{month.name} {month.year}", style="bold" if calendar_focused else "")
    text.append(f"  ({(picker.month_cursor.selected or 0) + 1}/{len(picker.months)})", style="dim")
    text.append(f"\n{WEEKDAYS}\n", style="dim")

    grid = picker.day_cursor
    for row in range(grid.rows):
        if row:
            text.append("\n")
        for column in range(grid.columns):
            index = row * grid.columns + column - grid.offset
            if index >= grid.upper_bound:
                break
            if column:
                text.append(" ")
            cell = f"{index + 1:2d}" if index >= 0 else "  "
            selected = (row, column) == (grid.row, grid.column)
            text.append(cell, style="reverse" if selected else "")

    hour, minute = picker.time.hour_minute()
    text.append("\n\nTime: ", style="bold" if not calendar_focused else "")
    hour_style = minute_style = ""
    if not calendar_focused:
        if picker.time.focus is PickerFocus.HOUR:
            hour_style = "reverse"
        else:
            minute_style = "reverse"
    text.append(f"{hour:02d}", style=hour_style)
    text.append(":")
    text.append(f"{minute:02d}", style=minute_style)
    return text


def render_flash(message: FlashMessage | None) -> Text:
    if message is None:
        return Text()
    return Text(message.message, style=SEVERITY_STYLES[message.severity])


class Panel(Static):
    """A bordered panel shown and dimmed according to the view plan."""

    DEFAULT_CSS = """
    Panel {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    Panel.dimmed {
        text-opacity: 50%;
    }
    """

    VIEW: View | None = None

    def show_from(self, controller: Controller) -> None:
        plan = controller.view_plan
        if self.VIEW is not None:
            self.display = plan.shows(self.VIEW)
            self.set_class(plan.is_dimmed(self.VIEW), "dimmed")
        if self.display:
            self.update(self.render_from(controller))

    def render_from(self, controller: Controller) -> Text:
        raise NotImplementedError


class TaskListPanel(Panel):
    """The todo list."""

    DEFAULT_CSS = """
    TaskListPanel {
        width: 2fr;
        height: 100%;
        overflow-y: auto;
    }
    """

    VIEW = View.TASK_LIST

    def render_from(self, controller: Controller) -> Text:
        return render_task_list(controller)


class DetailPanel(Panel):
    """Description and metadata of the selected todo."""

    DEFAULT_CSS = """
    DetailPanel {
        width: 3fr;
        height: 100%;
    }
    """

    VIEW = View.TASK_LIST

    def render_from(self, controller: Controller) -> Text:
        return render_detail(controller.selected_task())


class EditorPanel(Panel):
    VIEW = View.EDITOR

    def render_from(self, controller: Controller) -> Text:
        return render_editor(controller.editor)

    def show_from(self, controller: Controller) -> None:
        super().show_from(controller)
        self.border_title = "Edit todo" if controller.editor.is_editing_existing else "Add todo"


class FinderPanel(Panel):
    DEFAULT_CSS = """
    FinderPanel {
        max-height: 15;
    }
    """

    VIEW = View.FINDER

    def render_from(self, controller: Controller) -> Text:
        return render_finder(controller.finder)


class DueDatePanel(Panel):
    VIEW = View.DUE_DATE

    def render_from(self, controller: Controller) -> Text:
        return render_due_date(controller.due_date)


class FlashBar(Static):
    DEFAULT_CSS = """
    FlashBar {
        height: 1;
        padding: 0 1;
    }
    """

    def show_from(self, controller: Controller) -> None:
        self.update(render_flash(controller.flash))


class HintBar(Static):
    DEFAULT_CSS = """
    HintBar {
        height: 1;
        padding: 0 1;
        background: $panel;
        color: $text-muted;
    }
    """

    def show_from(self, controller: Controller) -> None:
        self.update(Text(controller.hint_text))
