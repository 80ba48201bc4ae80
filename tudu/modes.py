"""
Interaction modes and their pure projections.

The hint bar text and the view plan (which surfaces draw, which are
dimmed) are functions of the active mode only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tudu.keys import Action, KeyMap


class Mode(Enum):
    NORMAL = "normal"
    ADD_TASK = "add_task"
    EDIT_TASK = "edit_task"
    FIND = "find"
    MOVE = "move"
    DUE_DATE = "due_date"


EDITOR_MODES = frozenset({Mode.ADD_TASK, Mode.EDIT_TASK})

# Allowed mode changes; anything else is refused by the controller.
TRANSITIONS: dict[Mode, frozenset[Mode]] = {
    Mode.NORMAL: frozenset({Mode.ADD_TASK, Mode.EDIT_TASK, Mode.FIND, Mode.MOVE}),
    Mode.ADD_TASK: frozenset({Mode.NORMAL, Mode.DUE_DATE}),
    Mode.EDIT_TASK: frozenset({Mode.NORMAL, Mode.DUE_DATE}),
    Mode.FIND: frozenset({Mode.NORMAL}),
    Mode.MOVE: frozenset({Mode.NORMAL}),
    Mode.DUE_DATE: EDITOR_MODES,
}


def can_transition(current: Mode, target: Mode) -> bool:
    return target in TRANSITIONS[current]


class View(Enum):
    TASK_LIST = "task_list"
    EDITOR = "editor"
    FINDER = "finder"
    DUE_DATE = "due_date"


@dataclass(frozen=True)
class ViewPlan:
    """Views to draw, bottom to top, and which of them are de-emphasized."""

    views: tuple[View, ...]
    dimmed: frozenset[View] = frozenset()

    def shows(self, view: View) -> bool:
        return view in self.views

    def is_dimmed(self, view: View) -> bool:
        return view in self.dimmed


VIEW_PLANS: dict[Mode, ViewPlan] = {
    Mode.NORMAL: ViewPlan((View.TASK_LIST,)),
    Mode.MOVE: ViewPlan((View.TASK_LIST,)),
    Mode.ADD_TASK: ViewPlan((View.TASK_LIST, View.EDITOR), frozenset({View.TASK_LIST})),
    Mode.EDIT_TASK: ViewPlan((View.TASK_LIST, View.EDITOR), frozenset({View.TASK_LIST})),
    Mode.FIND: ViewPlan((View.TASK_LIST, View.FINDER), frozenset({View.TASK_LIST})),
    Mode.DUE_DATE: ViewPlan(
        (View.TASK_LIST, View.EDITOR, View.DUE_DATE),
        frozenset({View.TASK_LIST, View.EDITOR}),
    ),
}


def view_plan(mode: Mode) -> ViewPlan:
    return VIEW_PLANS[mode]


HINTS: dict[Mode, tuple[tuple[str, Action], ...]] = {
    Mode.NORMAL: (
        ("Up", Action.MOVE_UP),
        ("Down", Action.MOVE_DOWN),
        ("Add", Action.ADD_TODO),
        ("Find", Action.FIND_MODE),
        ("Move", Action.MOVE_MODE),
        ("Toggle", Action.TOGGLE_COMPLETED),
        ("Edit", Action.EDIT_TODO),
        ("Delete", Action.REMOVE_TODO),
        ("Quit", Action.QUIT),
    ),
    Mode.ADD_TASK: (
        ("Back", Action.BACK),
        ("Edit desc", Action.EDIT_DESCRIPTION),
        ("Mark recurring", Action.MARK_RECURRING),
        ("Due date", Action.OPEN_CALENDAR),
        ("Save", Action.SUBMIT),
    ),
    Mode.FIND: (
        ("Back", Action.BACK),
        ("Up", Action.ALT_MOVE_UP),
        ("Down", Action.ALT_MOVE_DOWN),
        ("Select", Action.SUBMIT),
    ),
    Mode.MOVE: (
        ("Up", Action.MOVE_UP),
        ("Down", Action.MOVE_DOWN),
        ("Done", Action.SUBMIT),
    ),
    Mode.DUE_DATE: (
        ("Back", Action.BACK),
        ("Prev month", Action.PREV_MONTH),
        ("Next month", Action.NEXT_MONTH),
        ("Switch", Action.SWITCH_FOCUS),
        ("Clear", Action.CLEAR_DUE_DATE),
        ("Set", Action.SUBMIT),
    ),
}
HINTS[Mode.EDIT_TASK] = HINTS[Mode.ADD_TASK]


def hint_text(mode: Mode, keymap: KeyMap) -> str:
    """The hint bar line for ``mode``."""
    return "  ".join(f"{name} [{keymap.label(action)}]" for name, action in HINTS[mode])
