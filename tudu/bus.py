"""
Intents and the message bus.

Sub-components never touch the task collection or the mode themselves;
they describe what they want as an intent and send it to the bus. The
controller takes exactly one intent per tick.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from tudu.errors import BusClosedError
from tudu.models import Task
from tudu.modes import Mode
from tudu.notification import FlashMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnterMode:
    mode: Mode


@dataclass(frozen=True)
class SubmitTask:
    """Append ``task``, or replace the task at ``index`` when given."""

    task: Task
    index: int | None = None


@dataclass(frozen=True)
class ToggleCompleted:
    pass


@dataclass(frozen=True)
class RemoveSelected:
    pass


@dataclass(frozen=True)
class SwapSelected:
    """Swap the selected task with the one ``offset`` positions away."""

    offset: int


@dataclass(frozen=True)
class Rank:
    query: str


@dataclass(frozen=True)
class SelectMatch:
    """Select the task at original ``index`` and return to normal mode."""

    index: int


@dataclass(frozen=True)
class SetDueDate:
    """Write ``when`` into the editor; None clears the due date."""

    when: datetime | None


@dataclass(frozen=True)
class Flash:
    message: FlashMessage


@dataclass(frozen=True)
class EditDescription:
    text: str


@dataclass(frozen=True)
class Quit:
    pass


Intent = Union[
    EnterMode,
    SubmitTask,
    ToggleCompleted,
    RemoveSelected,
    SwapSelected,
    Rank,
    SelectMatch,
    SetDueDate,
    Flash,
    EditDescription,
    Quit,
]


class MessageBus:
    """Unbounded multi-producer, single-consumer intent queue."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Intent] = queue.SimpleQueue()
        self._closed = False

    def __len__(self) -> int:
        return self._queue.qsize()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, intent: Intent) -> None:
        """Enqueue ``intent``; raises BusClosedError once the consumer is gone."""
        if self._closed:
            raise BusClosedError(f"cannot send {type(intent).__name__}: bus is closed")
        logger.debug("send %r", intent)
        self._queue.put_nowait(intent)

    def try_recv(self) -> Intent | None:
        """Take the oldest pending intent without blocking."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def close(self) -> None:
        self._closed = True
