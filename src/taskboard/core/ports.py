# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task list controller and the dashboard depend on this Protocol instead of
the concrete HTTP client, so tests can hand them an in-memory fake.
"""

from typing import Any, Protocol

from ..tasks.task_models import Statistics, Task

TaskFields = dict[str, Any]
# Wire-shaped task fields: {"title", "priority", "status", "startTime", "endTime"}.


class TaskApi(Protocol):
    """
    Remote task backend.

    Every method raises TransportError on network/HTTP failure.
    """

    async def list_tasks(self) -> list[Task]: ...

    async def create_task(self, fields: TaskFields) -> Task: ...

    async def update_task(self, task_id: str, fields: TaskFields) -> Task: ...

    async def delete_task(self, task_id: str) -> None: ...

    async def get_statistics(self) -> Statistics: ...
