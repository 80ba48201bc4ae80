"""
Task model.

Tasks are identified by their position in the collection; there is no
stable id. Timestamps are naive local datetimes and persist as ISO-8601.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from tudu.errors import RecurringTaskError

TIME_FORMAT = "%m/%d/%y %I:%M %p"


def _parse_datetime(s: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    if not s:
        return None
    try:
        return datetime.fromisoformat(s)
    except (ValueError, TypeError):
        return None


def _format_datetime(dt: datetime | None) -> str:
    return dt.strftime(TIME_FORMAT) if dt else ""


@dataclass
class Task:
    """A single todo item."""

    name: str
    description: str = ""
    completed: bool = False
    recurring: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    edited_at: datetime | None = None
    due_at: datetime | None = None

    def toggle_completed(self) -> bool:
        """Flip the completion flag and return the new value.

        Recurring tasks are refused and left untouched.
        """
        if self.recurring:
            raise RecurringTaskError(f"cannot complete recurring task {self.name!r}")
        self.completed = not self.completed
        return self.completed

    def merged_into(self, original: Task, now: datetime | None = None) -> Task:
        """Return this edit applied on top of ``original``.

        Creation time and completion carry over from the original; a task
        that became recurring is never left completed.
        """
        completed = original.completed and not self.recurring
        return replace(
            self,
            completed=completed,
            created_at=original.created_at,
            edited_at=now or datetime.now(),
        )

    def metadata_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs for the detail view."""
        return [
            ("Added", _format_datetime(self.created_at)),
            ("Edited", _format_datetime(self.edited_at)),
            ("Due", _format_datetime(self.due_at)),
            ("Recurring", "yes" if self.recurring else "no"),
        ]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "completed": self.completed,
            "recurring": self.recurring,
            "created_at": self.created_at.isoformat(),
        }
        if self.edited_at:
            data["edited_at"] = self.edited_at.isoformat()
        if self.due_at:
            data["due_at"] = self.due_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Convert a persisted mapping to a Task."""
        recurring = bool(data.get("recurring", False))
        return cls(
            name=data.get("name", ""),
            description=data.get("description", ""),
            # recurring tasks are never stored as completed
            completed=bool(data.get("completed", False)) and not recurring,
            recurring=recurring,
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
            edited_at=_parse_datetime(data.get("edited_at")),
            due_at=_parse_datetime(data.get("due_at")),
        )
