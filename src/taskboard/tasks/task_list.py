# src/taskboard/tasks/task_list.py

from __future__ import annotations

"""
Task list controller.

Owns everything the task list screen shows:
- the displayed rows (fetched, then filtered/sorted client-side),
- the active filter/sort criteria,
- the multi-select set used for bulk delete,
- the create/edit form.

The in-memory collection is only a cache: every mutation goes to the backend
and is followed by a full refetch. Nothing is patched locally.
"""

import logging
from dataclasses import replace
from typing import Any

from ..core.errors import PartialBulkFailure, TransportError, ValidationError, describe_error
from ..core.ports import TaskApi
from .task_filters import derive_rows
from .task_form import TaskForm
from .task_models import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    FilterCriteria,
    SortDirection,
    SortKey,
    Task,
    TaskStatus,
)

logger = logging.getLogger(__name__)

FETCH_ERROR_DEFAULT = "Failed to fetch tasks"


def _is_clear(value: Any) -> bool:
    return value is None or str(value).strip().lower() in {"", "clear", "none", "all"}


class TaskListController:
    def __init__(self, api: TaskApi) -> None:
        self.api = api

        self.tasks: list[Task] = []
        # Ids from the last successful fetch, before filtering.
        self._known_ids: set[str] = set()
        self.criteria = FilterCriteria()
        self.error: str | None = None

        # dict as an insertion-ordered set: bulk delete goes in check order.
        self._selected: dict[str, None] = {}

        self.form = TaskForm()
        self.form_open = False
        self.editing: Task | None = None

    # -------------------- queries --------------------
    @property
    def selected_ids(self) -> list[str]:
        return list(self._selected)

    def is_selected(self, task_id: str) -> bool:
        return task_id in self._selected

    def has_task(self, task_id: str) -> bool:
        """True if the last fetch returned this id, even when the filter hides it."""
        return task_id in self._known_ids

    def find(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    # -------------------- fetching --------------------
    async def mount(self) -> None:
        await self.fetch_and_derive()

    async def fetch_and_derive(self) -> list[Task]:
        """
        Refetch the whole collection and rebuild the displayed rows.

        On TransportError the rows are cleared, the error is recorded for
        display and re-raised.
        """
        try:
            fetched = await self.api.list_tasks()
        except TransportError as exc:
            logger.warning("Error fetching tasks: %s", exc)
            self.tasks = []
            self._known_ids = set()
            self.error = describe_error(exc, FETCH_ERROR_DEFAULT)
            raise

        self.error = None
        self.tasks = derive_rows(fetched, self.criteria)

        # Selection must not point at tasks the backend no longer has.
        self._known_ids = {t.id for t in fetched}
        stale = [tid for tid in self._selected if tid not in self._known_ids]
        for tid in stale:
            del self._selected[tid]

        logger.debug(
            "Derived %d/%d row(s) with criteria=%s", len(self.tasks), len(fetched), self.criteria
        )
        return self.tasks

    # -------------------- filters --------------------
    async def set_filter(self, key: str, value: Any) -> list[Task]:
        """Replace one filter field, then refetch and re-derive."""
        self.criteria = self._apply_filter(self.criteria, key, value)
        logger.info("Filter %s=%r -> %s", key, value, self.criteria)
        return await self.fetch_and_derive()

    @staticmethod
    def _apply_filter(criteria: FilterCriteria, key: str, value: Any) -> FilterCriteria:
        name = key.strip().replace("_", "").lower()
        clear = _is_clear(value)

        if name == "priority":
            if clear:
                return replace(criteria, priority=None)
            try:
                priority = int(str(value).strip())
            except ValueError:
                raise ValidationError(f"Invalid priority: {value}") from None
            if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
                raise ValidationError(f"Invalid priority: {value}")
            return replace(criteria, priority=priority)

        if name == "status":
            if clear:
                return replace(criteria, status=None)
            status = TaskStatus.from_text(value)
            if status is None:
                raise ValidationError(f"Invalid status: {value}")
            return replace(criteria, status=status)

        if name == "sortkey":
            if clear:
                return replace(criteria, sort_key=None)
            sort_key = SortKey.from_text(value)
            if sort_key is None:
                raise ValidationError(f"Invalid sort key: {value}")
            return replace(criteria, sort_key=sort_key)

        if name == "sortdirection":
            if clear:
                return replace(criteria, sort_direction=None)
            direction = SortDirection.from_text(value)
            if direction is None:
                raise ValidationError(f"Invalid sort direction: {value}")
            return replace(criteria, sort_direction=direction)

        if name == "sort":
            # Combined token, e.g. "startTime-desc".
            if clear:
                return replace(criteria, sort_key=None, sort_direction=None)
            raw_key, _, raw_dir = str(value).strip().partition("-")
            sort_key = SortKey.from_text(raw_key)
            direction = SortDirection.from_text(raw_dir) if raw_dir else SortDirection.ASC
            if sort_key is None or direction is None:
                raise ValidationError(f"Invalid sort: {value}")
            return replace(criteria, sort_key=sort_key, sort_direction=direction)

        raise ValidationError(f"Unknown filter: {key}")

    # -------------------- selection --------------------
    def toggle_selection(self, task_id: str) -> bool:
        """Flip membership; returns True if the id is selected afterwards."""
        if task_id in self._selected:
            del self._selected[task_id]
            return False
        self._selected[task_id] = None
        return True

    def clear_selection(self) -> None:
        self._selected.clear()

    # -------------------- form --------------------
    def open_create(self) -> None:
        self.editing = None
        self.form = TaskForm()
        self.form_open = True

    def open_edit(self, task: Task | str) -> Task:
        if isinstance(task, str):
            found = self.find(task)
            if found is None:
                raise ValidationError(f"Task {task} not found.")
            task = found
        self.editing = task
        self.form = TaskForm.from_task(task)
        self.form_open = True
        return task

    def set_form_field(self, name: str, value: Any) -> None:
        self.form.set_field(name, value)

    def close_form(self) -> None:
        self.form_open = False
        self.editing = None
        self.form = TaskForm()

    async def create_or_update(self, form: TaskForm | None = None) -> Task:
        """
        Validate, then create (no task being edited) or update.

        ValidationError is raised before any API call. On success the form
        is closed and the list refetched. On TransportError the form stays
        open and the error propagates.
        """
        form = form if form is not None else self.form
        form.validate()
        fields = form.to_fields()

        editing = self.editing
        if editing is not None:
            saved = await self.api.update_task(editing.id, fields)
            logger.info("Updated task %s", editing.id)
        else:
            saved = await self.api.create_task(fields)
            logger.info("Created task %s", saved.id)

        self.close_form()
        await self.fetch_and_derive()
        return saved

    # -------------------- deletion --------------------
    async def delete_one(self, task_id: str) -> None:
        await self.delete_selected([task_id])

    async def delete_selected(self, ids: list[str] | None = None) -> list[str]:
        """
        Delete ids one at a time (default: current selection, in check order).

        Stops at the first failure: already-deleted ids stay deleted, the
        rest are not attempted. The list is refetched either way; on failure
        PartialBulkFailure is raised after the refetch.
        """
        targets = list(self._selected) if ids is None else list(ids)
        if not targets:
            return []

        deleted: list[str] = []
        for index, task_id in enumerate(targets):
            try:
                await self.api.delete_task(task_id)
            except TransportError as exc:
                remaining = targets[index + 1 :]
                logger.warning(
                    "Bulk delete aborted at %s after %d deletion(s): %s", task_id, len(deleted), exc
                )
                for tid in deleted:
                    self._selected.pop(tid, None)
                try:
                    await self.fetch_and_derive()
                except TransportError:
                    logger.exception("Refresh after failed delete also failed")
                raise PartialBulkFailure(
                    deleted=deleted, failed_id=task_id, remaining=remaining, cause=exc
                ) from exc
            deleted.append(task_id)

        logger.info("Deleted %d task(s)", len(deleted))
        self._selected.clear()
        await self.fetch_and_derive()
        return deleted
