"""Task list: cursor movement, move mode and normal-mode commands."""

from __future__ import annotations

from tudu.bus import (
    EnterMode,
    MessageBus,
    Quit,
    RemoveSelected,
    SwapSelected,
    ToggleCompleted,
)
from tudu.cursor import BoundedCursor, WrapPolicy
from tudu.keys import Action, KeyMap, KeyPress
from tudu.modes import Mode

# Normal-mode keys that only produce an intent.
_NORMAL_INTENTS = (
    (Action.ADD_TODO, EnterMode(Mode.ADD_TASK)),
    (Action.EDIT_TODO, EnterMode(Mode.EDIT_TASK)),
    (Action.FIND_MODE, EnterMode(Mode.FIND)),
    (Action.MOVE_MODE, EnterMode(Mode.MOVE)),
    (Action.TOGGLE_COMPLETED, ToggleCompleted()),
    (Action.REMOVE_TODO, RemoveSelected()),
    (Action.QUIT, Quit()),
)


class TaskListComponent:
    """Owns the task-list cursor; the tasks themselves belong to the controller."""

    def __init__(self, keys: KeyMap, bus: MessageBus, length: int = 0) -> None:
        self.keys = keys
        self.bus = bus
        self.cursor = BoundedCursor(length, WrapPolicy.WRAP)
        self.cursor.first()
        self.move_mode = False

    @property
    def selected(self) -> int | None:
        return self.cursor.selected

    def resize(self, length: int) -> None:
        """Re-bound after the collection changed size; select the first item if none is."""
        self.cursor.update_boundary(length)
        if self.cursor.selected is None:
            self.cursor.first()

    def removed(self, index: int, length: int) -> None:
        """Follow a removal at ``index``: select the item above it."""
        self.cursor.update_boundary(length)
        if self.cursor.is_empty():
            return
        if index:
            self.cursor.select(index - 1)
        else:
            self.cursor.first()

    def handle_input(self, press: KeyPress) -> None:
        if self.move_mode:
            self._handle_move(press)
            return

        if self.keys.matches(press, Action.MOVE_UP):
            self.cursor.prev()
            return
        if self.keys.matches(press, Action.MOVE_DOWN):
            self.cursor.next()
            return
        for action, intent in _NORMAL_INTENTS:
            if self.keys.matches(press, action):
                self.bus.send(intent)
                return

    def _handle_move(self, press: KeyPress) -> None:
        if self.keys.matches(press, Action.MOVE_UP):
            self.bus.send(SwapSelected(-1))
        elif self.keys.matches(press, Action.MOVE_DOWN):
            self.bus.send(SwapSelected(1))
        elif self.keys.matches(press, Action.SUBMIT) or self.keys.matches(press, Action.BACK):
            self.bus.send(EnterMode(Mode.NORMAL))
