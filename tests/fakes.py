# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from taskboard.core.errors import TransportError
from taskboard.core.ports import TaskFields
from taskboard.tasks.task_models import Statistics, Task


@dataclass(slots=True)
class ApiCall:
    op: str
    task_id: str | None = None
    fields: dict[str, Any] | None = None


@dataclass(slots=True)
class FakeTaskApi:
    """
    In-memory TaskApi used by controller/dashboard tests.

    - Captures every call for assertions
    - Can be told to fail listing, statistics, or deleting specific ids
    """

    tasks: list[Task] = field(default_factory=list)
    statistics: Statistics | None = None
    calls: list[ApiCall] = field(default_factory=list)

    fail_list: TransportError | None = None
    fail_statistics: TransportError | None = None
    fail_delete_ids: set[str] = field(default_factory=set)
    fail_save: TransportError | None = None

    next_id: int = 100

    def ops(self) -> list[str]:
        return [c.op for c in self.calls]

    async def list_tasks(self) -> list[Task]:
        self.calls.append(ApiCall("list"))
        if self.fail_list is not None:
            raise self.fail_list
        return list(self.tasks)

    async def create_task(self, fields: TaskFields) -> Task:
        self.calls.append(ApiCall("create", fields=dict(fields)))
        if self.fail_save is not None:
            raise self.fail_save
        task = Task.from_api({"_id": f"t{self.next_id}", **fields})
        self.next_id += 1
        self.tasks.append(task)
        return task

    async def update_task(self, task_id: str, fields: TaskFields) -> Task:
        self.calls.append(ApiCall("update", task_id=task_id, fields=dict(fields)))
        if self.fail_save is not None:
            raise self.fail_save
        task = Task.from_api({"_id": task_id, **fields})
        self.tasks = [task if t.id == task_id else t for t in self.tasks]
        return task

    async def delete_task(self, task_id: str) -> None:
        self.calls.append(ApiCall("delete", task_id=task_id))
        if task_id in self.fail_delete_ids:
            raise TransportError(f"cannot delete {task_id}", status_code=500)
        self.tasks = [t for t in self.tasks if t.id != task_id]

    async def get_statistics(self) -> Statistics:
        self.calls.append(ApiCall("statistics"))
        if self.fail_statistics is not None:
            raise self.fail_statistics
        assert self.statistics is not None, "set FakeTaskApi.statistics first"
        return self.statistics


def make_task(
    task_id: str,
    *,
    title: str | None = None,
    priority: int = 1,
    status: str = "pending",
    start: str | None = "2024-01-01T10:00",
    end: str | None = None,
) -> Task:
    return Task.from_api(
        {
            "_id": task_id,
            "title": title or f"task {task_id}",
            "priority": priority,
            "status": status,
            "startTime": start,
            "endTime": end,
        }
    )
