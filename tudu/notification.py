"""
Flash notifications with scheduled expiry.

Setting a notification shows it immediately and schedules an expiry signal
on the event loop. The signal carries the notification's token and lands
in a single-slot channel that the controller polls once per tick; a signal
whose token is not the live notification's token is stale and ignored.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import partial
from typing import Callable

logger = logging.getLogger(__name__)

FLASH_SECONDS = 1.0

Scheduler = Callable[[float, Callable[[], None]], None]


class Severity(Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class FlashMessage:
    """A transient status message."""

    message: str
    severity: Severity = Severity.INFO
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def info(cls, message: str) -> FlashMessage:
        return cls(message, Severity.INFO)

    @classmethod
    def warn(cls, message: str) -> FlashMessage:
        return cls(message, Severity.WARN)

    @classmethod
    def error(cls, message: str) -> FlashMessage:
        return cls(message, Severity.ERROR)


def asyncio_scheduler(delay: float, callback: Callable[[], None]) -> None:
    """Run ``callback`` after ``delay`` seconds on the running event loop."""
    asyncio.get_running_loop().call_later(delay, callback)


class ExpirySlot:
    """Single-slot signal holding the newest expired token since the last take.

    Fed by ``call_later`` callbacks, which run on the same event-loop thread
    that polls the controller.
    """

    def __init__(self) -> None:
        self._token: int | None = None

    def put(self, token: int) -> None:
        if self._token is None or token > self._token:
            self._token = token

    def take(self) -> int | None:
        token, self._token = self._token, None
        return token


class NotificationTimer:
    """Holds at most one live FlashMessage and expires it on schedule."""

    def __init__(
        self,
        duration: float = FLASH_SECONDS,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.duration = duration
        self._schedule = scheduler or asyncio_scheduler
        self._slot = ExpirySlot()
        self._serial = 0
        self._token: int | None = None
        self._current: FlashMessage | None = None

    @property
    def current(self) -> FlashMessage | None:
        return self._current

    def lifetime(self, message: FlashMessage) -> float:
        """Seconds ``message`` stays visible; errors last twice as long."""
        if message.severity is Severity.ERROR:
            return self.duration * 2
        return self.duration

    def set(self, message: FlashMessage) -> None:
        """Show ``message`` now, superseding any live one."""
        self._serial += 1
        self._token = self._serial
        self._current = message
        logger.debug("flash[%d] %s: %s", self._serial, message.severity.value, message.message)
        self._schedule(self.lifetime(message), partial(self._slot.put, self._serial))

    def clear(self) -> None:
        self._current = None
        self._token = None

    def poll(self) -> bool:
        """Consume a pending expiry signal; return True if the live message was cleared."""
        token = self._slot.take()
        if token is None or token != self._token:
            return False
        self.clear()
        return True
