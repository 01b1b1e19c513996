# tests/test_commands.py

from __future__ import annotations

import pytest

from taskboard.cli.commands import CommandRegistry, registry
from taskboard.core.errors import TransportError
from taskboard.tasks.task_models import PendingSummaryRow, Statistics

from .fakes import FakeTaskApi


@pytest.mark.asyncio
async def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    async def h2(state, args):
        called["h2"] += 1
        return "h2"

    async def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert await reg.handle(state, "/a x") == "h2"
    assert await reg.handle(state, "/b y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Could not parse" in (await reg.handle(state, '/add title="oops') or "")


@pytest.mark.asyncio
async def test_add_command_creates_and_renders(state, api: FakeTaskApi) -> None:
    await state.task_list.mount()
    reply = await registry.handle(
        state, '/add title="Call the bank" priority=3 start=2024-05-01T09:00 end=2024-05-01T09:30'
    )
    assert reply is not None
    assert "Call the bank" in reply
    assert api.ops() == ["list", "create", "list"]
    assert api.calls[1].fields["priority"] == 3


@pytest.mark.asyncio
async def test_add_command_reports_validation_error(state, api: FakeTaskApi) -> None:
    reply = await registry.handle(state, "/add priority=3 start=2024-05-01T09:00")
    assert reply == "Please fill in all required fields."
    assert api.calls == []


@pytest.mark.asyncio
async def test_edit_command_updates(state, api: FakeTaskApi) -> None:
    await state.task_list.mount()
    reply = await registry.handle(state, "/edit a status=finished")
    assert reply is not None and "Write report" in reply
    assert api.calls[1].op == "update"
    assert api.calls[1].task_id == "a"


@pytest.mark.asyncio
async def test_filter_and_sort_commands(state) -> None:
    await state.task_list.mount()
    reply = await registry.handle(state, "/filter status pending")
    assert reply is not None and "Write report" in reply and "Ship release" not in reply

    await registry.handle(state, "/filter status clear")
    reply = await registry.handle(state, "/sort startTime-desc")
    assert state.task_list.criteria.sort_token == "startTime-desc"
    assert [t.id for t in state.task_list.tasks] == ["c", "b", "a"]

    assert (await registry.handle(state, "/filter priority 9")) == "Invalid priority: 9"


@pytest.mark.asyncio
async def test_select_and_bulk_delete_partial_failure(state, api: FakeTaskApi) -> None:
    await state.task_list.mount()
    await registry.handle(state, "/select a b c")
    assert state.task_list.selected_ids == ["a", "b", "c"]

    api.fail_delete_ids = {"b"}
    reply = await registry.handle(state, "/delete-selected")

    assert reply is not None
    assert reply.startswith("Deleted 1 task(s); failed on b (cannot delete b); 1 not attempted.")
    assert state.task_list.selected_ids == ["b", "c"]


@pytest.mark.asyncio
async def test_delete_selected_requires_selection(state, api: FakeTaskApi) -> None:
    assert "Nothing selected" in (await registry.handle(state, "/delete-selected") or "")
    assert api.calls == []


@pytest.mark.asyncio
async def test_transport_error_becomes_reply(state, api: FakeTaskApi) -> None:
    api.fail_list = TransportError("backend down")
    assert await registry.handle(state, "/refresh") == "Request failed: backend down"


@pytest.mark.asyncio
async def test_stats_command(state, api: FakeTaskApi) -> None:
    api.statistics = Statistics(
        total_tasks=3,
        completed_percentage=66.7,
        pending_percentage=33.3,
        average_completion_time=4.5,
        pending_summary=[PendingSummaryRow(priority=1, pending_tasks=1, time_lapsed=2.0, balance_time=1.0)],
    )
    reply = await registry.handle(state, "/stats")
    assert reply is not None and "66.7%" in reply and "Pending Tasks" in reply


@pytest.mark.asyncio
async def test_select_accepts_task_hidden_by_filter(state, api: FakeTaskApi) -> None:
    await state.task_list.mount()
    await registry.handle(state, "/filter status pending")
    assert [t.id for t in state.task_list.tasks] == ["a"]

    await registry.handle(state, "/select b")
    assert state.task_list.selected_ids == ["b"]

    assert await registry.handle(state, "/select zzz") == "Task zzz not found."
    assert state.task_list.selected_ids == ["b"]
