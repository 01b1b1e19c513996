# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.cli.bootstrap import create_initial_state
from taskboard.core.state import AppState

from .fakes import FakeTaskApi, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        api_base_url="http://backend.test/api",
        api_timeout_seconds=None,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def api() -> FakeTaskApi:
    return FakeTaskApi(
        tasks=[
            make_task("a", title="Write report", priority=1, status="Pending", start="2024-01-01T10:00"),
            make_task(
                "b",
                title="Ship release",
                priority=2,
                status="Finished",
                start="2024-01-02T10:00",
                end="2024-01-02T14:30",
            ),
            make_task("c", title="Plan sprint", priority=1, status="finished", start="2024-01-03T09:00"),
        ]
    )


@pytest.fixture()
def state(settings: SimpleNamespace, api: FakeTaskApi) -> AppState:
    """AppState wired with the in-memory API fake."""
    return create_initial_state(settings=settings, api=api)
