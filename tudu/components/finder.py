"""Fuzzy finder over task names."""

from __future__ import annotations

from typing import Iterable

from tudu.bus import EnterMode, Flash, MessageBus, Rank, SelectMatch
from tudu.components.line_input import LineInput
from tudu.cursor import BoundedCursor, WrapPolicy
from tudu.fuzzy import Match, rank
from tudu.keys import Action, KeyMap, KeyPress
from tudu.modes import Mode
from tudu.notification import FlashMessage


class FuzzyFinder:
    """Query input plus the ranked matches and their cursor."""

    def __init__(self, keys: KeyMap, bus: MessageBus) -> None:
        self.keys = keys
        self.bus = bus
        self.query = LineInput()
        self.matches: list[Match] = []
        self.cursor = BoundedCursor(0, WrapPolicy.WRAP)

    def clear(self) -> None:
        self.query.reset()
        self.matches = []
        self.cursor.update_boundary(0)

    def skim(self, candidates: Iterable[tuple[int, str]]) -> None:
        """Rank ``candidates`` against the current query and reset the cursor."""
        self.matches = rank(self.query.value, candidates)
        self.cursor.update_boundary(len(self.matches))
        if self.matches:
            self.cursor.select(0)
        else:
            self.cursor.deselect()

    def selected_match(self) -> Match | None:
        if self.cursor.selected is None:
            return None
        return self.matches[self.cursor.selected]

    def handle_input(self, press: KeyPress) -> None:
        if self.keys.matches(press, Action.BACK):
            self.bus.send(EnterMode(Mode.NORMAL))
        elif self.keys.matches(press, Action.ALT_MOVE_UP):
            self.cursor.prev()
        elif self.keys.matches(press, Action.ALT_MOVE_DOWN):
            self.cursor.next()
        elif self.keys.matches(press, Action.SUBMIT):
            match = self.selected_match()
            if match is None:
                self.bus.send(Flash(FlashMessage.warn("No matching todo")))
            else:
                self.bus.send(SelectMatch(match.index))
        elif self.query.handle(press):
            self.bus.send(Rank(self.query.value))
