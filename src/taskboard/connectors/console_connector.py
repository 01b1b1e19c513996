# src/taskboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.errors import TransportError, describe_error
from ..core.state import AppState
from ..tasks.task_list import FETCH_ERROR_DEFAULT
from ..tasks.task_table import render_task_list

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState, runner: asyncio.Runner) -> None:
    """
    Blocking REPL.

    All coroutines run on `runner`'s loop so the HTTP client never changes
    loops during a session.
    """
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskboard"))
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        runner.run(state.task_list.mount())
    except TransportError as exc:
        _print_ts(f"[ERROR] {describe_error(exc, FETCH_ERROR_DEFAULT)}")
    print(render_task_list(state.task_list))

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = runner.run(command_registry.handle(state, user_input, emit=emit))
        except KeyboardInterrupt:
            print()
            _print_ts("Interrupted.")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list them."
        _print_ts(reply)

    logger.info("Console connector finished.")
