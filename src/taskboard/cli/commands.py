# src/taskboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.errors import PartialBulkFailure, TransportError, ValidationError, describe_error
from ..core.state import AppState
from ..tasks.task_table import render_task_list

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console (/help, /add, /filter, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Validation and transport errors become reply lines; anything else propagates.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as exc:
            return f"Could not parse command: {exc}"
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return await h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return await h2(state, args)
        except ValidationError as exc:
            return str(exc)
        except TransportError as exc:
            return f"Request failed: {describe_error(exc, 'Request failed')}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - quit")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_assignments(args: list[str]) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key.strip():
            raise ValidationError(f"Expected field=value, got: {arg}")
        out.append((key.strip(), value))
    return out


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state.task_list)


async def cmd_refresh(state: AppState, args: list[str]) -> str:
    await state.task_list.fetch_and_derive()
    return render_task_list(state.task_list)


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    assignments = _parse_assignments(args)
    ctl = state.task_list
    ctl.open_create()
    for key, value in assignments:
        ctl.set_form_field(key, value)
    saved = await ctl.create_or_update()
    if emit is not None:
        emit(f"Created task {saved.id}.")
    return render_task_list(ctl)


async def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /edit <id> field=value ..."
    assignments = _parse_assignments(args[1:])
    ctl = state.task_list
    task = ctl.open_edit(args[0])
    for key, value in assignments:
        ctl.set_form_field(key, value)
    await ctl.create_or_update()
    if emit is not None:
        emit(f"Updated task {task.id}.")
    return render_task_list(ctl)


async def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"
    await state.task_list.delete_one(args[0])
    return render_task_list(state.task_list)


async def cmd_select(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /select <id> [<id> ...]"
    ctl = state.task_list
    for task_id in args:
        if not ctl.has_task(task_id) and not ctl.is_selected(task_id):
            return f"Task {task_id} not found."
        ctl.toggle_selection(task_id)
    return render_task_list(ctl)


async def cmd_delete_selected(state: AppState, args: list[str]) -> str:
    ctl = state.task_list
    if not ctl.selected_ids:
        return "Nothing selected. Use /select <id> first."
    try:
        deleted = await ctl.delete_selected()
    except PartialBulkFailure as exc:
        return f"{exc}\n{render_task_list(ctl)}"
    return f"Deleted {len(deleted)} task(s).\n{render_task_list(ctl)}"


async def cmd_filter(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /filter <priority|status|sort> <value|clear>"
    await state.task_list.set_filter(args[0], args[1])
    return render_task_list(state.task_list)


async def cmd_sort(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /sort <startTime-asc|startTime-desc|endTime-asc|endTime-desc|clear>"
    await state.task_list.set_filter("sort", args[0])
    return render_task_list(state.task_list)


async def cmd_stats(state: AppState, args: list[str]) -> str:
    await state.dashboard.load()
    return state.dashboard.render() or "No statistics."


registry.register("help", cmd_help, "show this help", aliases=["h", "?"])
registry.register("list", cmd_list, "show the task list", aliases=["ls"])
registry.register("refresh", cmd_refresh, "refetch tasks from the server")
registry.register(
    "add",
    cmd_add,
    'create a task: /add title="..." priority=1-5 start=YYYY-MM-DDTHH:MM [end=...] [status=pending|finished]',
)
registry.register("edit", cmd_edit, "edit a task: /edit <id> field=value ...")
registry.register("delete", cmd_delete, "delete one task: /delete <id>", aliases=["rm"])
registry.register(
    "select", cmd_select, "toggle selection (ids hidden by the filter count too): /select <id> [<id> ...]"
)
registry.register("delete-selected", cmd_delete_selected, "delete all selected tasks")
registry.register("filter", cmd_filter, "filter: /filter <priority|status|sort> <value|clear>")
registry.register("sort", cmd_sort, "sort: /sort <startTime|endTime>-<asc|desc> or clear")
registry.register("stats", cmd_stats, "show the dashboard", aliases=["dashboard"])
