# src/taskboard/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

MIN_PRIORITY = 1
MAX_PRIORITY = 5


class TaskStatus(StrEnum):
    PENDING = "pending"
    FINISHED = "finished"

    @classmethod
    def from_text(cls, raw: Any) -> TaskStatus | None:
        """Case-insensitive lookup; None for anything unknown."""
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


class SortKey(StrEnum):
    START_TIME = "startTime"
    END_TIME = "endTime"

    @classmethod
    def from_text(cls, raw: Any) -> SortKey | None:
        if raw is None:
            return None
        needle = str(raw).strip().replace("_", "").lower()
        for key in cls:
            if key.value.lower() == needle:
                return key
        return None


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_text(cls, raw: Any) -> SortDirection | None:
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


def parse_timestamp(raw: Any) -> datetime | None:
    """
    Parse an ISO-8601 timestamp from the API or the form.

    Aware values are converted to naive UTC so payloads mixing offsets and
    local "datetime-local" strings still compare. Unparseable input -> None.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Unparseable timestamp %r", raw)
            return None
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value


def _as_int(raw: Any, default: int = 0) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def _as_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, datetime):
        return raw.isoformat()
    return str(raw).strip()


def _as_float(raw: Any, default: float = 0.0) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return default


@dataclass(slots=True)
class Task:
    id: str
    title: str
    priority: int
    # Raw status string as stored by the backend (case is not normalized there).
    status: str
    start_time: datetime | None
    end_time: datetime | None = None
    # Timestamps exactly as the backend sent them; edits resend these untouched.
    start_raw: str = ""
    end_raw: str = ""

    @property
    def status_key(self) -> TaskStatus | None:
        return TaskStatus.from_text(self.status)

    @property
    def total_hours(self) -> float | None:
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() / 3600.0

    def timestamp(self, key: SortKey) -> datetime | None:
        return self.start_time if key == SortKey.START_TIME else self.end_time

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Task:
        """Build a Task from a backend document (`_id`, camelCase fields)."""
        task_id = raw.get("_id", raw.get("id"))
        if task_id is None or str(task_id).strip() == "":
            raise ValueError(f"task payload has no id: {raw!r}")
        return cls(
            id=str(task_id),
            title=str(raw.get("title") or ""),
            priority=_as_int(raw.get("priority")),
            status=str(raw.get("status") or ""),
            start_time=parse_timestamp(raw.get("startTime")),
            end_time=parse_timestamp(raw.get("endTime")),
            start_raw=_as_text(raw.get("startTime")),
            end_raw=_as_text(raw.get("endTime")),
        )


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Active list constraints. None means "no constraint"."""

    priority: int | None = None
    status: TaskStatus | None = None
    sort_key: SortKey | None = None
    sort_direction: SortDirection | None = None

    @property
    def sort_token(self) -> str | None:
        if self.sort_key is None:
            return None
        direction = self.sort_direction or SortDirection.ASC
        return f"{self.sort_key.value}-{direction.value}"

    def is_empty(self) -> bool:
        return self.priority is None and self.status is None and self.sort_key is None


@dataclass(frozen=True, slots=True)
class PendingSummaryRow:
    priority: int
    pending_tasks: int
    time_lapsed: float
    balance_time: float

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> PendingSummaryRow:
        return cls(
            priority=_as_int(raw.get("priority")),
            pending_tasks=_as_int(raw.get("pendingTasks")),
            time_lapsed=_as_float(raw.get("timeLapsed")),
            balance_time=_as_float(raw.get("balanceTime")),
        )


@dataclass(frozen=True, slots=True)
class Statistics:
    total_tasks: int
    completed_percentage: float
    pending_percentage: float
    average_completion_time: float
    pending_summary: list[PendingSummaryRow] = field(default_factory=list)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Statistics:
        rows = raw.get("pendingSummary") or []
        return cls(
            total_tasks=_as_int(raw.get("totalTasks")),
            completed_percentage=_as_float(raw.get("completedPercentage")),
            pending_percentage=_as_float(raw.get("pendingPercentage")),
            average_completion_time=_as_float(raw.get("averageCompletionTime")),
            pending_summary=[PendingSummaryRow.from_api(r) for r in rows if isinstance(r, dict)],
        )
