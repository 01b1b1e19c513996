# src/taskboard/tasks/task_filters.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import FilterCriteria, SortDirection, Task


def derive_rows(tasks: Iterable[Task], criteria: FilterCriteria) -> list[Task]:
    """
    Filter then sort a fetched collection for display.

    - priority: exact match
    - status: case-insensitive match
    - sort: by parsed timestamp; stable, so ties keep fetch order.
      Tasks without the timestamp go last in both directions.
    """
    rows = list(tasks)

    if criteria.priority is not None:
        rows = [t for t in rows if t.priority == criteria.priority]

    if criteria.status is not None:
        wanted = criteria.status.value
        rows = [t for t in rows if t.status.lower() == wanted]

    if criteria.sort_key is None:
        return rows

    key = criteria.sort_key
    dated = [t for t in rows if t.timestamp(key) is not None]
    undated = [t for t in rows if t.timestamp(key) is None]

    # sorted(reverse=True) keeps equal elements in fetch order.
    dated = sorted(
        dated,
        key=lambda t: t.timestamp(key),
        reverse=criteria.sort_direction == SortDirection.DESC,
    )
    return dated + undated
