"""
Due-date picker: a six-month calendar plus an hour/minute time picker.

Every selectable field is a bounded cursor: the month strip clamps, the
day grid and the time fields wrap.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from tudu.bus import EnterMode, MessageBus, SetDueDate
from tudu.cursor import BoundedCursor, GridCursor, WrapPolicy
from tudu.errors import OutOfBoundsError
from tudu.keys import Action, KeyMap, KeyPress
from tudu.modes import Mode

MONTH_COUNT = 6
HOURS = 24
MINUTES = 60


@dataclass(frozen=True)
class Month:
    """One calendar page."""

    year: int
    month: int
    days: int
    padding: int  # weekday of the 1st, Monday == 0

    @classmethod
    def of(cls, year: int, month: int) -> Month:
        padding, days = calendar.monthrange(year, month)
        return cls(year, month, days, padding)

    @property
    def name(self) -> str:
        return calendar.month_name[self.month]

    def following(self) -> Month:
        if self.month == 12:
            return Month.of(self.year + 1, 1)
        return Month.of(self.year, self.month + 1)


def month_window(start: date, count: int = MONTH_COUNT) -> list[Month]:
    """``count`` consecutive months beginning with ``start``'s month."""
    months = [Month.of(start.year, start.month)]
    while len(months) < count:
        months.append(months[-1].following())
    return months


class PickerFocus(Enum):
    HOUR = "hour"
    MINUTE = "minute"


class TimePicker:
    """Hour and minute fields; one of them has focus."""

    def __init__(self, hour: int = 0, minute: int = 0) -> None:
        self.hour = BoundedCursor(HOURS, WrapPolicy.WRAP, selected=hour)
        self.minute = BoundedCursor(MINUTES, WrapPolicy.WRAP, selected=minute)
        self.focus = PickerFocus.HOUR

    def set(self, hour: int, minute: int) -> None:
        self.hour.select(hour)
        self.minute.select(minute)

    def toggle_focus(self) -> None:
        self.focus = PickerFocus.MINUTE if self.focus is PickerFocus.HOUR else PickerFocus.HOUR

    def _focused(self) -> BoundedCursor:
        return self.hour if self.focus is PickerFocus.HOUR else self.minute

    def next(self) -> None:
        self._focused().next()

    def prev(self) -> None:
        self._focused().prev()

    def hour_minute(self) -> tuple[int, int]:
        return self.hour.selected or 0, self.minute.selected or 0


class DueDateFocus(Enum):
    CALENDAR = "calendar"
    TIME = "time"


class DueDatePicker:
    """Calendar and time picker behind the due-date mode."""

    def __init__(self, keys: KeyMap, bus: MessageBus, today: date | None = None) -> None:
        self.keys = keys
        self.bus = bus
        self.origin = Mode.ADD_TASK
        self.focus = DueDateFocus.CALENDAR
        self.months: list[Month] = []
        self.month_cursor = BoundedCursor(0, WrapPolicy.CLAMP)
        self.day_cursor = GridCursor(0, columns=7, wrap=WrapPolicy.WRAP)
        self.time = TimePicker()
        self.reset(datetime.combine(today or date.today(), datetime.now().time()))

    @property
    def month(self) -> Month:
        return self.months[self.month_cursor.selected or 0]

    def _show_month(self, index: int) -> None:
        self.month_cursor.select(index)
        month = self.months[index]
        self.day_cursor.offset = month.padding
        self.day_cursor.update_boundary(month.days)
        if self.day_cursor.selected is None:
            self.day_cursor.first()

    def reset(self, now: datetime) -> None:
        """Start a fresh six-month window on ``now`` with ``now`` selected."""
        self.months = month_window(now.date())
        self.month_cursor.update_boundary(len(self.months))
        self.focus = DueDateFocus.CALENDAR
        self.time.focus = PickerFocus.HOUR
        self._show_month(0)
        self.day_cursor.select(now.day - 1)
        self.time.set(now.hour, now.minute)

    def set_date_time(self, when: datetime) -> None:
        """Select ``when``; raises OutOfBoundsError if it is outside the window."""
        for i, month in enumerate(self.months):
            if (month.year, month.month) == (when.year, when.month):
                self._show_month(i)
                self.day_cursor.select(when.day - 1)
                self.time.set(when.hour, when.minute)
                return
        raise OutOfBoundsError(
            (when.year - self.months[0].year) * 12 + when.month - self.months[0].month,
            len(self.months),
        )

    def prepare(self, origin: Mode, due_at: datetime | None, now: datetime | None = None) -> None:
        """Open the picker from ``origin`` on ``due_at``, or on now if unset.

        Raises OutOfBoundsError after falling back to now when ``due_at``
        is outside the window.
        """
        self.origin = origin
        self.reset(now or datetime.now())
        if due_at is not None:
            self.set_date_time(due_at)

    def value(self) -> datetime:
        hour, minute = self.time.hour_minute()
        return datetime(
            self.month.year,
            self.month.month,
            (self.day_cursor.selected or 0) + 1,
            hour,
            minute,
        )

    def prev_month(self) -> None:
        self.month_cursor.prev()
        self._show_month(self.month_cursor.selected or 0)

    def next_month(self) -> None:
        self.month_cursor.next()
        self._show_month(self.month_cursor.selected or 0)

    def handle_input(self, press: KeyPress) -> None:
        if self.keys.matches(press, Action.BACK):
            self.bus.send(EnterMode(self.origin))
            return
        if self.keys.matches(press, Action.SUBMIT):
            self.bus.send(SetDueDate(self.value()))
            return
        if self.keys.matches(press, Action.CLEAR_DUE_DATE):
            self.bus.send(SetDueDate(None))
            return
        if self.keys.matches(press, Action.SWITCH_FOCUS):
            if self.focus is DueDateFocus.CALENDAR:
                self.focus = DueDateFocus.TIME
            else:
                self.focus = DueDateFocus.CALENDAR
            return

        if self.focus is DueDateFocus.CALENDAR:
            self._handle_calendar(press)
        else:
            self._handle_time(press)

    def _handle_calendar(self, press: KeyPress) -> None:
        if self.keys.matches(press, Action.MOVE_UP):
            self.day_cursor.up()
        elif self.keys.matches(press, Action.MOVE_DOWN):
            self.day_cursor.down()
        elif self.keys.matches(press, Action.MOVE_LEFT):
            self.day_cursor.left()
        elif self.keys.matches(press, Action.MOVE_RIGHT):
            self.day_cursor.right()
        elif self.keys.matches(press, Action.PREV_MONTH):
            self.prev_month()
        elif self.keys.matches(press, Action.NEXT_MONTH):
            self.next_month()

    def _handle_time(self, press: KeyPress) -> None:
        if self.keys.matches(press, Action.MOVE_UP):
            self.time.prev()
        elif self.keys.matches(press, Action.MOVE_DOWN):
            self.time.next()
        elif self.keys.matches(press, Action.MOVE_LEFT) or self.keys.matches(
            press, Action.MOVE_RIGHT
        ):
            self.time.toggle_focus()
