# src/taskboard/tasks/task_table.py

from __future__ import annotations

import io
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .task_list import TaskListController
from .task_models import Task, TaskStatus

DISPLAY_FORMAT = "%d %b %Y %I:%M %p"
STATUS_STYLE = {TaskStatus.PENDING: "red", TaskStatus.FINISHED: "green"}


def format_datetime(value: datetime | None) -> str:
    """`01 Jan 2024 10:00 AM`, or `-` when missing."""
    if value is None:
        return "-"
    return value.strftime(DISPLAY_FORMAT)


def format_total_time(task: Task) -> str:
    """Hours between start and end; `-` when unknown or zero."""
    hours = task.total_hours
    if not hours:
        return "-"
    return f"{hours:.2f}".rstrip("0").rstrip(".")


def _status_cell(task: Task) -> str:
    style = STATUS_STYLE.get(task.status_key) if task.status_key else None
    text = escape(task.status)
    return f"[{style}]{text}[/{style}]" if style else text


def build_task_table(controller: TaskListController) -> Table:
    title = "Task List"
    if controller.criteria.priority is not None:
        title += f" | priority={controller.criteria.priority}"
    if controller.criteria.status is not None:
        title += f" | status={controller.criteria.status.value}"
    if controller.criteria.sort_token:
        title += f" | sort={controller.criteria.sort_token}"

    table = Table(title=title, show_header=True)
    table.add_column("Sel", justify="center")
    table.add_column("Task ID", style="cyan", no_wrap=True)
    table.add_column("Title", overflow="fold")
    table.add_column("Priority", justify="center")
    table.add_column("Status")
    table.add_column("Start Time", no_wrap=True)
    table.add_column("End Time", no_wrap=True)
    table.add_column("Total Time (hrs)", justify="right")

    for task in controller.tasks:
        table.add_row(
            escape("[x]" if controller.is_selected(task.id) else "[ ]"),
            escape(task.id),
            escape(task.title),
            str(task.priority),
            _status_cell(task),
            format_datetime(task.start_time),
            format_datetime(task.end_time),
            format_total_time(task),
        )
    return table


def render_task_list(controller: TaskListController, *, width: int = 140) -> str:
    """Plain-text rendering of the task list screen."""
    console = Console(record=True, width=width, file=io.StringIO())

    if controller.error is not None:
        console.print(f"[bold red]Error:[/bold red] {escape(controller.error)}")
        return console.export_text()

    table = build_task_table(controller)
    console.print(table)

    if not controller.tasks:
        console.print("[dim](no tasks)[/dim]")

    selected = controller.selected_ids
    if selected:
        console.print(f"Selected: {len(selected)} ({escape(', '.join(selected))})")

    return console.export_text()
