"""
Mode state machine.

The controller owns the task collection and every sub-component. Key
presses go to whichever component owns the active mode; components answer
with intents on the bus, and the controller applies one intent per tick.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

from tudu.bus import (
    EditDescription,
    EnterMode,
    Flash,
    Intent,
    MessageBus,
    Quit,
    Rank,
    RemoveSelected,
    SelectMatch,
    SetDueDate,
    SubmitTask,
    SwapSelected,
    ToggleCompleted,
)
from tudu.components import DueDatePicker, FuzzyFinder, TaskEditor, TaskListComponent
from tudu.errors import OutOfBoundsError, RecurringTaskError, StorageError
from tudu.keys import KeyMap, KeyPress
from tudu.models import Task
from tudu.modes import EDITOR_MODES, Mode, ViewPlan, can_transition, hint_text, view_plan
from tudu.notification import FlashMessage, NotificationTimer
from tudu.storage import TaskStore

logger = logging.getLogger(__name__)

ExternalEditor = Callable[[str], str]


class PollOutcome(Enum):
    NO_ACTION = "no_action"
    QUIT = "quit"


class Controller:
    """Owns the todo list, the active mode and all input surfaces."""

    def __init__(
        self,
        tasks: list[Task],
        store: TaskStore,
        keys: KeyMap | None = None,
        notifications: NotificationTimer | None = None,
        bus: MessageBus | None = None,
        external_editor: ExternalEditor | None = None,
    ) -> None:
        self.tasks = tasks
        self.store = store
        self.keys = keys or KeyMap()
        self.bus = bus if bus is not None else MessageBus()
        self.notifications = notifications if notifications is not None else NotificationTimer()
        self.external_editor = external_editor
        self.mode = Mode.NORMAL

        self.task_list = TaskListComponent(self.keys, self.bus, len(tasks))
        self.editor = TaskEditor(self.keys, self.bus)
        self.finder = FuzzyFinder(self.keys, self.bus)
        self.due_date = DueDatePicker(self.keys, self.bus)

        self._handlers: dict[type, Callable[[Any], PollOutcome | None]] = {
            EnterMode: self._on_enter_mode,
            SubmitTask: self._on_submit_task,
            ToggleCompleted: self._on_toggle_completed,
            RemoveSelected: self._on_remove_selected,
            SwapSelected: self._on_swap_selected,
            Rank: self._on_rank,
            SelectMatch: self._on_select_match,
            SetDueDate: self._on_set_due_date,
            Flash: self._on_flash,
            EditDescription: self._on_edit_description,
            Quit: self._on_quit,
        }

    @classmethod
    def load(cls, store: TaskStore, **kwargs) -> Controller:
        """Build a controller around the tasks currently in ``store``."""
        return cls(store.load(), store, **kwargs)

    # -------------------- queries --------------------

    @property
    def hint_text(self) -> str:
        return hint_text(self.mode, self.keys)

    @property
    def view_plan(self) -> ViewPlan:
        return view_plan(self.mode)

    @property
    def flash(self) -> FlashMessage | None:
        return self.notifications.current

    def selected_task(self) -> Task | None:
        index = self.task_list.selected
        if index is None:
            return None
        return self.tasks[index]

    def candidates(self) -> list[tuple[int, str]]:
        return [(i, t.name) for i, t in enumerate(self.tasks)]

    # -------------------- main loop --------------------

    def handle_key(self, press: KeyPress) -> None:
        """Give ``press`` to the component that owns the active mode."""
        if self.mode in (Mode.NORMAL, Mode.MOVE):
            self.task_list.handle_input(press)
        elif self.mode in EDITOR_MODES:
            self.editor.handle_input(press)
        elif self.mode is Mode.FIND:
            self.finder.handle_input(press)
        elif self.mode is Mode.DUE_DATE:
            self.due_date.handle_input(press)

    def poll_notification(self) -> bool:
        return self.notifications.poll()

    def poll_message(self) -> PollOutcome:
        """Apply at most one pending intent."""
        intent = self.bus.try_recv()
        if intent is None:
            return PollOutcome.NO_ACTION
        logger.debug("apply %r in %s", intent, self.mode.value)
        return self._handlers[type(intent)](intent) or PollOutcome.NO_ACTION

    def tick(self, key: KeyPress | None = None) -> PollOutcome:
        """One loop iteration: handle the key, expire notifications, apply one intent."""
        if key is not None:
            self.handle_key(key)
        self.poll_notification()
        return self.poll_message()

    def shutdown(self) -> None:
        self.bus.close()

    # -------------------- helpers --------------------

    def notify(self, message: FlashMessage) -> None:
        self.notifications.set(message)

    def _save(self) -> None:
        """Persist the collection; on failure keep memory authoritative and say so."""
        try:
            self.store.save(self.tasks)
        except StorageError as e:
            logger.error("Save failed: %s", e)
            self.notify(FlashMessage.error("Failed to save todos"))

    def _set_mode(self, mode: Mode) -> None:
        logger.debug("mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode

    def _refuse(self, intent: Intent) -> None:
        logger.info("Ignoring %r in %s mode", intent, self.mode.value)

    # -------------------- intent handlers --------------------

    def _on_enter_mode(self, intent: EnterMode) -> None:
        source, target = self.mode, intent.mode
        if target is source:
            return
        if not can_transition(source, target) or (
            source is Mode.DUE_DATE and target is not self.editor.mode
        ):
            self._refuse(intent)
            return

        if source is Mode.NORMAL:
            if target is Mode.ADD_TASK:
                self.editor.clear()
            elif target is Mode.EDIT_TASK:
                index = self.task_list.selected
                if index is None:
                    self.notify(FlashMessage.error("No todo selected"))
                    return
                self.editor.populate_with(self.tasks[index], index)
            elif target is Mode.FIND:
                self.finder.clear()
                self.finder.skim(self.candidates())
            elif target is Mode.MOVE:
                self.task_list.move_mode = True
        elif source in EDITOR_MODES:
            if target is Mode.DUE_DATE:
                try:
                    self.due_date.prepare(source, self.editor.due_at)
                except OutOfBoundsError:
                    self.notify(FlashMessage.warn("Due date is outside the calendar range"))
            else:
                self.editor.clear()
        elif source is Mode.FIND:
            self.finder.clear()
        elif source is Mode.MOVE:
            self.task_list.move_mode = False

        self._set_mode(target)

    def _on_submit_task(self, intent: SubmitTask) -> None:
        if self.mode not in EDITOR_MODES:
            self._refuse(intent)
            return

        if intent.index is None:
            self.tasks.append(intent.task)
            self.task_list.resize(len(self.tasks))
            self.notify(FlashMessage.info("Added todo"))
        elif 0 <= intent.index < len(self.tasks):
            self.tasks[intent.index] = intent.task.merged_into(self.tasks[intent.index])
            self.notify(FlashMessage.info("Edited todo"))
        else:
            self.notify(FlashMessage.error("Todo no longer exists"))
            return

        self._save()
        self.editor.clear()
        self._set_mode(Mode.NORMAL)

    def _on_toggle_completed(self, intent: ToggleCompleted) -> None:
        if self.mode is not Mode.NORMAL:
            self._refuse(intent)
            return
        task = self.selected_task()
        if task is None:
            self.notify(FlashMessage.error("No todo selected"))
            return
        try:
            completed = task.toggle_completed()
        except RecurringTaskError:
            logger.info("Refused to complete recurring todo %r", task.name)
            self.notify(FlashMessage.warn("Cannot mark recurring todos as completed"))
            return
        msg = "Marked todo completed" if completed else "Marked todo not completed"
        self.notify(FlashMessage.info(msg))
        self._save()

    def _on_remove_selected(self, intent: RemoveSelected) -> None:
        if self.mode is not Mode.NORMAL:
            self._refuse(intent)
            return
        index = self.task_list.selected
        if index is None:
            self.notify(FlashMessage.error("No todo selected"))
            return
        del self.tasks[index]
        self.task_list.removed(index, len(self.tasks))
        self.notify(FlashMessage.warn("Removed todo"))
        self._save()

    def _on_swap_selected(self, intent: SwapSelected) -> None:
        if self.mode is not Mode.MOVE:
            self._refuse(intent)
            return
        index = self.task_list.selected
        if index is None:
            return
        other = index + intent.offset
        if not 0 <= other < len(self.tasks):
            return
        self.tasks[index], self.tasks[other] = self.tasks[other], self.tasks[index]
        self.task_list.cursor.select(other)
        self._save()

    def _on_rank(self, intent: Rank) -> None:
        if self.mode is not Mode.FIND:
            self._refuse(intent)
            return
        if intent.query != self.finder.query.value:
            # superseded by a later keystroke whose Rank is still queued
            return
        self.finder.skim(self.candidates())

    def _on_select_match(self, intent: SelectMatch) -> None:
        if self.mode is not Mode.FIND:
            self._refuse(intent)
            return
        try:
            self.task_list.cursor.select(intent.index)
        except OutOfBoundsError:
            self.notify(FlashMessage.error("Todo no longer exists"))
            return
        self.finder.clear()
        self._set_mode(Mode.NORMAL)

    def _on_set_due_date(self, intent: SetDueDate) -> None:
        if self.mode is not Mode.DUE_DATE:
            self._refuse(intent)
            return
        self.editor.due_at = intent.when
        self._set_mode(self.editor.mode)

    def _on_flash(self, intent: Flash) -> None:
        self.notify(intent.message)

    def _on_edit_description(self, intent: EditDescription) -> None:
        if self.mode not in EDITOR_MODES:
            self._refuse(intent)
            return
        if self.external_editor is None:
            self.notify(FlashMessage.warn("No external editor available"))
            return
        try:
            self.editor.description = self.external_editor(intent.text)
        except OSError as e:
            logger.error("External editor failed: %s", e)
            self.notify(FlashMessage.error("Could not run the external editor"))

    def _on_quit(self, intent: Quit) -> PollOutcome:
        return PollOutcome.QUIT
