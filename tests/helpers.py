"""Test helpers: a manual timer scheduler and key-driving shortcuts."""

from typing import Callable

from tudu.controller import Controller
from tudu.keys import KeyPress


class ManualScheduler:
    """Records scheduled callbacks so tests decide when timers fire."""

    def __init__(self) -> None:
        self.pending: list[tuple[float, Callable[[], None]]] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        self.pending.append((delay, callback))

    def fire(self, index: int) -> None:
        self.pending[index][1]()

    def fire_all(self) -> None:
        for _, callback in self.pending:
            callback()
        self.pending.clear()


def press(key: str) -> KeyPress:
    """A KeyPress the way the terminal driver reports ``key``."""
    if len(key) == 1:
        return KeyPress(key, key)
    if key == "space":
        return KeyPress(key, " ")
    return KeyPress(key)


def drive(controller: Controller, *keys: str) -> None:
    """Press each key, then tick until the bus is empty."""
    for key in keys:
        controller.tick(press(key))
    while len(controller.bus):
        controller.tick()


def type_text(controller: Controller, text: str) -> None:
    drive(controller, *["space" if c == " " else c for c in text])
