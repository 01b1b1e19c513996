# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..dashboard.view import DashboardView
from ..tasks.task_list import TaskListController
from .ports import TaskApi


@dataclass
class AppState:
    # Settings kept on the state so commands can read them (app name, API url).
    settings: object

    api: TaskApi
    task_list: TaskListController
    dashboard: DashboardView
