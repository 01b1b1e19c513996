# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the HTTP task API into the controllers held by AppState.
"""

from __future__ import annotations

import logging

from ..api.client import HttpTaskApi
from ..config import get_settings
from ..core.ports import TaskApi
from ..core.state import AppState
from ..dashboard.view import DashboardView
from ..tasks.task_list import TaskListController

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, api: TaskApi | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Both settings and api are injectable so tests never touch the network.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    data_dir = getattr(settings, "data_dir", None)
    if data_dir is not None:
        data_dir.mkdir(parents=True, exist_ok=True)

    if api is None:
        api = HttpTaskApi.from_settings(settings)
        logger.info("Task API: %s", getattr(settings, "api_base_url", "?"))

    return AppState(
        settings=settings,
        api=api,
        task_list=TaskListController(api),
        dashboard=DashboardView(api),
    )


async def close_state(state: AppState) -> None:
    """Release the HTTP client (no-op for fakes without aclose)."""
    aclose = getattr(state.api, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("API client close failed.", exc_info=True)
