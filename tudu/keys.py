"""
Key bindings.

Raw key presses are matched against logical actions. Bindings are plain
data: each action maps to one or more key names as reported by the
terminal driver ("j", "ctrl+e", "shift+tab", "escape", ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class Action(Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ALT_MOVE_UP = "alt_move_up"
    ALT_MOVE_DOWN = "alt_move_down"
    PREV_MONTH = "prev_month"
    NEXT_MONTH = "next_month"
    SWITCH_FOCUS = "switch_focus"
    TOGGLE_COMPLETED = "toggle_completed"
    ADD_TODO = "add_todo"
    EDIT_TODO = "edit_todo"
    REMOVE_TODO = "remove_todo"
    EDIT_DESCRIPTION = "edit_description"
    MARK_RECURRING = "mark_recurring"
    OPEN_CALENDAR = "open_calendar"
    CLEAR_DUE_DATE = "clear_due_date"
    FIND_MODE = "find_mode"
    MOVE_MODE = "move_mode"
    SUBMIT = "submit"
    BACK = "back"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyPress:
    """A raw key event: the key name and the printable character, if any."""

    key: str
    character: str | None = None

    @property
    def is_printable(self) -> bool:
        return self.character is not None and self.character.isprintable()


# fmt: off
DEFAULT_BINDINGS: dict[Action, tuple[str, ...]] = {
    Action.MOVE_UP:          ("k", "up"),
    Action.MOVE_DOWN:        ("j", "down"),
    Action.MOVE_LEFT:        ("h", "left"),
    Action.MOVE_RIGHT:       ("l", "right"),
    Action.ALT_MOVE_UP:      ("shift+tab", "up"),
    Action.ALT_MOVE_DOWN:    ("tab", "down"),
    Action.PREV_MONTH:       ("left_square_bracket",),
    Action.NEXT_MONTH:       ("right_square_bracket",),
    Action.SWITCH_FOCUS:     ("tab",),
    Action.TOGGLE_COMPLETED: ("space",),
    Action.ADD_TODO:         ("a",),
    Action.EDIT_TODO:        ("e",),
    Action.REMOVE_TODO:      ("d",),
    Action.EDIT_DESCRIPTION: ("ctrl+e",),
    Action.MARK_RECURRING:   ("ctrl+r",),
    Action.OPEN_CALENDAR:    ("ctrl+d",),
    Action.CLEAR_DUE_DATE:   ("backspace", "delete"),
    Action.FIND_MODE:        ("f",),
    Action.MOVE_MODE:        ("m",),
    Action.SUBMIT:           ("enter",),
    Action.BACK:             ("escape",),
    Action.QUIT:             ("q",),
}
# fmt: on

KEY_SYMBOLS = {
    "space": "˽",
    "tab": "⇥",
    "shift+tab": "⇤",
    "escape": "⎋",
    "enter": "⏎",
    "up": "▲",
    "down": "▼",
    "left": "◀",
    "right": "▶",
    "backspace": "⌫",
    "delete": "⌦",
    "left_square_bracket": "[",
    "right_square_bracket": "]",
}


def key_label(key: str) -> str:
    """Short display form of a key name for the hint bar."""
    if key in KEY_SYMBOLS:
        return KEY_SYMBOLS[key]
    if key.startswith("ctrl+"):
        return "^" + key_label(key[len("ctrl+"):])
    if key.startswith("shift+"):
        return "⇪" + key_label(key[len("shift+"):]).upper()
    return key


class KeyMap:
    """Answers whether a raw key press means a logical action."""

    def __init__(self, bindings: Mapping[Action, tuple[str, ...]] | None = None) -> None:
        self._bindings = dict(DEFAULT_BINDINGS)
        if bindings:
            self._bindings.update(bindings)

    def matches(self, press: KeyPress, action: Action) -> bool:
        return press.key in self._bindings.get(action, ())

    def keys_for(self, action: Action) -> tuple[str, ...]:
        return self._bindings.get(action, ())

    def label(self, action: Action) -> str:
        """Display label of the primary key bound to ``action``."""
        keys = self.keys_for(action)
        return key_label(keys[0]) if keys else "?"
