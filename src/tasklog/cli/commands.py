# src/tasklog/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from ..core.state import AppState
from ..tasks.task_editing import resolve_edit
from ..tasks.task_models import Task

# Line reader for follow-up prompts; None means "cancelled".
# It is called synchronously from inside a handler, so it blocks the event loop
# while waiting. The console runs one command at a time, so nothing else is starved.
AskFn = Callable[[str], str | None]
CommandHandler = Callable[[AppState, str, AskFn | None], Awaitable[str]]

logger = logging.getLogger(__name__)

EMPTY_LIST_TEXT = "No tasks today.\nGo for a walk."


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

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

    async def handle(self, state: AppState, line: str, ask: AskFn | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        StorageError raised by a handler propagates to the caller.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, rest, ask)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other text adds it as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def render_tasks(tasks: Sequence[Task]) -> str:
    if not tasks:
        return EMPTY_LIST_TEXT
    lines = []
    for i, task in enumerate(tasks, start=1):
        mark = "x" if task.is_completed else " "
        lines.append(f"{i:>3}. [{mark}] {task.description}")
    return "\n".join(lines)


def _pick_task(state: AppState, token: str) -> Task | str:
    """Resolve a 1-based list position to a task, or return an error message."""
    tasks = state.controller.tasks
    try:
        pos = int(token)
    except ValueError:
        return f"Not a task number: {token!r}."
    if pos < 1 or pos > len(tasks):
        return f"No task #{pos} (the list has {len(tasks)})."
    return tasks[pos - 1]


async def cmd_help(state: AppState, arg_text: str, ask: AskFn | None = None) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, arg_text: str, ask: AskFn | None = None) -> str:
    return render_tasks(state.controller.tasks)


async def cmd_add(state: AppState, arg_text: str, ask: AskFn | None = None) -> str:
    if await state.controller.add_task(arg_text):
        return "Task added."
    return "Usage: /add <description>"


async def cmd_edit(state: AppState, arg_text: str, ask: AskFn | None = None) -> str:
    """
    /edit N text  -> replace the description of task N
    /edit N       -> prompt for the new description (empty input cancels)

    The prompt goes through ``ask``, which blocks until the user answers.
    """
    parts = arg_text.split(maxsplit=1)
    if not parts:
        return "Usage: /edit <n> [new description]"

    picked = _pick_task(state, parts[0])
    if isinstance(picked, str):
        return picked

    if len(parts) > 1:
        entered: str | None = parts[1]
    elif ask is not None:
        entered = ask(f"Edit task (was: {picked.description}): ")
    else:
        entered = None

    new_description = resolve_edit(picked.description, entered)
    if new_description is None:
        return "Edit cancelled."

    await state.controller.edit_task(picked, new_description)
    return "Task updated."


async def cmd_done(state: AppState, arg_text: str, ask: AskFn | None = None) -> str:
    if not arg_text:
        return "Usage: /done <n>"
    picked = _pick_task(state, arg_text.split()[0])
    if isinstance(picked, str):
        return picked
    await state.controller.toggle_task_completion(picked)
    return "Marked as not done." if picked.is_completed else "Marked as done."


async def cmd_delete(state: AppState, arg_text: str, ask: AskFn | None = None) -> str:
    if not arg_text:
        return "Usage: /del <n>"
    picked = _pick_task(state, arg_text.split()[0])
    if isinstance(picked, str):
        return picked
    await state.controller.delete_task(picked)
    return "Task deleted."


async def cmd_clear(state: AppState, arg_text: str, ask: AskFn | None = None) -> str:
    await state.controller.delete_all_tasks()
    logger.debug("All tasks deleted from console.")
    return "All tasks deleted."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <description>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> [new description].")
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <n>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
