"""Task editor used by both add and edit modes."""

from __future__ import annotations

from datetime import datetime

from tudu.bus import EditDescription, EnterMode, Flash, MessageBus, SubmitTask
from tudu.components.line_input import LineInput
from tudu.keys import Action, KeyMap, KeyPress
from tudu.models import Task
from tudu.modes import Mode
from tudu.notification import FlashMessage


class TaskEditor:
    """Pending fields of a task being added or edited."""

    def __init__(self, keys: KeyMap, bus: MessageBus) -> None:
        self.keys = keys
        self.bus = bus
        self.name = LineInput()
        self.description = ""
        self.recurring = False
        self.due_at: datetime | None = None
        self.index: int | None = None

    @property
    def is_editing_existing(self) -> bool:
        return self.index is not None

    @property
    def mode(self) -> Mode:
        """The mode this editor session belongs to."""
        return Mode.EDIT_TASK if self.is_editing_existing else Mode.ADD_TASK

    def clear(self) -> None:
        self.name.reset()
        self.description = ""
        self.recurring = False
        self.due_at = None
        self.index = None

    def populate_with(self, task: Task, index: int) -> None:
        self.name.set(task.name)
        self.description = task.description
        self.recurring = task.recurring
        self.due_at = task.due_at
        self.index = index

    def to_task(self) -> Task:
        """A fresh Task from the pending fields (merging happens on replace)."""
        return Task(
            name=self.name.value,
            description=self.description,
            recurring=self.recurring,
            due_at=self.due_at,
        )

    def handle_input(self, press: KeyPress) -> None:
        if self.keys.matches(press, Action.BACK):
            self.bus.send(EnterMode(Mode.NORMAL))
        elif self.keys.matches(press, Action.SUBMIT):
            self.bus.send(SubmitTask(self.to_task(), self.index))
        elif self.keys.matches(press, Action.EDIT_DESCRIPTION):
            self.bus.send(EditDescription(self.description))
        elif self.keys.matches(press, Action.MARK_RECURRING):
            self.recurring = not self.recurring
            msg = "Marked todo recurring" if self.recurring else "Marked todo nonrecurring"
            self.bus.send(Flash(FlashMessage.info(msg)))
        elif self.keys.matches(press, Action.OPEN_CALENDAR):
            self.bus.send(EnterMode(Mode.DUE_DATE))
        else:
            self.name.handle(press)
