# src/tasklog/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tasks
from ..core.ports import TaskList
from ..core.state import AppState
from ..tasks.task_store import StorageError

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _ask(prompt: str) -> str | None:
    """Read one line for an in-place edit; EOF or Ctrl+C cancel it."""
    try:
        return input(prompt)
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def _render(tasks: TaskList) -> None:
    print(render_tasks(tasks), flush=True)


def run_console_loop(state: AppState, runner: asyncio.Runner) -> None:
    """
    Interactive console front-end.

    Commands go through the slash-command registry; any other text adds a task.
    The task list is re-rendered whenever the controller publishes a new one.
    """
    logger.info("Console connector started (db=%s).", state.task_store.db_path)
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    _render(state.controller.tasks)
    unsubscribe = state.controller.subscribe(_render, replay=False)

    try:
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
                if user_input.startswith("/"):
                    response = runner.run(command_registry.handle(state, user_input, ask=_ask))
                else:
                    runner.run(state.controller.add_task(user_input))
                    response = None
            except StorageError as e:
                logger.exception("Storage failure while handling %r.", user_input)
                response = f"Storage error: {e}"
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is not None:
                _print_ts(response)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
