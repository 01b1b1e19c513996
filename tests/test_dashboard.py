# tests/test_dashboard.py

from __future__ import annotations

import pytest

from taskboard.core.errors import TransportError
from taskboard.dashboard.view import DashboardView
from taskboard.tasks.task_models import PendingSummaryRow, Statistics

from .fakes import FakeTaskApi


def _stats() -> Statistics:
    return Statistics(
        total_tasks=10,
        completed_percentage=40.0,
        pending_percentage=60.0,
        average_completion_time=2.5,
        pending_summary=[
            PendingSummaryRow(priority=1, pending_tasks=3, time_lapsed=12.0, balance_time=5.5),
            PendingSummaryRow(priority=4, pending_tasks=1, time_lapsed=1.0, balance_time=0.0),
        ],
    )


def test_renders_nothing_before_load() -> None:
    view = DashboardView(FakeTaskApi(statistics=_stats()))
    assert view.render() == ""
    assert not view.loaded


@pytest.mark.asyncio
async def test_loads_once_and_renders_summary() -> None:
    api = FakeTaskApi(statistics=_stats())
    view = DashboardView(api)

    await view.load()
    await view.load()

    assert api.ops() == ["statistics"]
    out = view.render()
    assert "Total:" in out and "10" in out
    assert "Completed:" in out and "40%" in out
    assert "Pending:" in out and "60%" in out
    assert "2.5 hrs" in out
    assert "Pending Tasks" in out
    for header in ("Priority", "Pending", "Time Lapsed", "Time to Finish"):
        assert header in out
    assert "5.5" in out


@pytest.mark.asyncio
async def test_error_rendered_verbatim() -> None:
    api = FakeTaskApi(fail_statistics=TransportError("Stats service unavailable", status_code=503))
    view = DashboardView(api)
    await view.load()
    assert view.render() == "Stats service unavailable"


@pytest.mark.asyncio
async def test_error_without_message_uses_default() -> None:
    view = DashboardView(FakeTaskApi(fail_statistics=TransportError()))
    await view.load()
    assert view.render() == "Failed to fetch stats"
    # No retry on a second load.
    await view.load()
    assert view.api.ops() == ["statistics"]
