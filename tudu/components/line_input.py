"""Single-line text input used by the editor and the finder."""

from __future__ import annotations

from tudu.keys import KeyPress


class LineInput:
    """Editable text with a cursor position."""

    def __init__(self, value: str = "") -> None:
        self.value = value
        self.cursor = len(value)

    def __repr__(self) -> str:
        return f"LineInput({self.value!r}, cursor={self.cursor})"

    def set(self, value: str) -> None:
        self.value = value
        self.cursor = len(value)

    def reset(self) -> None:
        self.set("")

    def handle(self, press: KeyPress) -> bool:
        """Apply an editing key. Returns True if the value changed."""
        key = press.key
        if key == "backspace":
            if self.cursor == 0:
                return False
            self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
            self.cursor -= 1
            return True
        if key == "delete":
            if self.cursor >= len(self.value):
                return False
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
            return True
        if key == "left":
            self.cursor = max(0, self.cursor - 1)
        elif key == "right":
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key == "home":
            self.cursor = 0
        elif key == "end":
            self.cursor = len(self.value)
        elif press.is_printable:
            self.value = self.value[: self.cursor] + press.character + self.value[self.cursor :]
            self.cursor += len(press.character)
            return True
        return False
