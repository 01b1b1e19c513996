# src/taskboard/tasks/task_form.py

from __future__ import annotations

"""
Create/edit form state.

The same form backs both "Add Task" and "Edit Task"; which one is submitted
is decided by the controller (is a task being edited or not).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.errors import ValidationError
from .task_models import MAX_PRIORITY, MIN_PRIORITY, Task, TaskStatus, parse_timestamp

MSG_REQUIRED = "Please fill in all required fields."
MSG_END_BEFORE_START = "End time must be after start time."

FORM_INPUT_FORMAT = "%Y-%m-%dT%H:%M"

# camelCase (wire / web form input names) and snake_case both map to attributes.
_FIELD_ALIASES: dict[str, str] = {
    "title": "title",
    "priority": "priority",
    "status": "status",
    "starttime": "start_time",
    "start_time": "start_time",
    "start": "start_time",
    "endtime": "end_time",
    "end_time": "end_time",
    "end": "end_time",
}


def _blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _form_time(value: datetime | None) -> str:
    return value.strftime(FORM_INPUT_FORMAT) if value else ""


@dataclass(slots=True)
class TaskForm:
    title: str = ""
    priority: str = ""
    status: str = TaskStatus.PENDING.value
    start_time: str = ""
    end_time: str = ""

    @classmethod
    def from_task(cls, task: Task) -> TaskForm:
        # Prefer the wire strings so an untouched time goes back with its seconds and offset.
        return cls(
            title=task.title,
            priority=str(task.priority),
            status=task.status_key.value if task.status_key else task.status,
            start_time=task.start_raw or _form_time(task.start_time),
            end_time=task.end_raw or _form_time(task.end_time),
        )

    def set_field(self, name: str, value: Any) -> None:
        attr = _FIELD_ALIASES.get(name.strip().lower())
        if attr is None:
            raise ValidationError(f"Unknown field: {name}")
        setattr(self, attr, "" if value is None else str(value))

    def validate(self) -> None:
        """Raise ValidationError on the first problem found."""
        if _blank(self.title) or _blank(self.priority) or _blank(self.start_time):
            raise ValidationError(MSG_REQUIRED)

        try:
            priority = int(str(self.priority).strip())
        except ValueError:
            raise ValidationError("Priority must be a number between 1 and 5.") from None
        if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
            raise ValidationError("Priority must be a number between 1 and 5.")

        if TaskStatus.from_text(self.status) is None:
            raise ValidationError("Status must be 'pending' or 'finished'.")

        start = parse_timestamp(self.start_time)
        if start is None:
            raise ValidationError("Start time is not a valid date/time.")

        if not _blank(self.end_time):
            end = parse_timestamp(self.end_time)
            if end is None:
                raise ValidationError("End time is not a valid date/time.")
            if end < start:
                raise ValidationError(MSG_END_BEFORE_START)

    def to_fields(self) -> dict[str, Any]:
        """Wire payload. Call validate() first."""
        status = TaskStatus.from_text(self.status) or TaskStatus.PENDING
        return {
            "title": self.title.strip(),
            "priority": int(str(self.priority).strip()),
            "status": status.value,
            "startTime": self.start_time.strip(),
            "endTime": self.end_time.strip() or None,
        }
