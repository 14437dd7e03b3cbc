# src/todo_list/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..connectors.console_renderer import format_stats
from ..core.state import AppState
from ..tasks.errors import NotFoundError, ValidationError

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by connectors (/help, /add, /toggle, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string (possibly empty) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name.lower())
        if not handler:
            return f"Unknown command: /{name.lower()}. Use /help to list available commands."

        return handler(state, rest.strip())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text adds a task; /exit quits)")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(raw: str) -> int | None:
    raw = raw.strip().lstrip("#")
    try:
        return int(raw)
    except ValueError:
        return None


def _completed_tasks(n: int) -> str:
    return f"{n} completed task{'' if n == 1 else 's'}"


def add_task(state: AppState, text: str) -> str:
    """Add a task from raw user input; validation failures go to the message board."""
    try:
        state.store.add(text)
    except ValidationError as e:
        state.messages.show_error(str(e))
    return ""


def _save_edit(state: AppState, task_id: int, text: str) -> str:
    try:
        state.store.edit(task_id, text)
    except ValidationError as e:
        state.messages.show_error(str(e))
    except NotFoundError:
        logger.debug("edit ignored, no task id=%s", task_id)
    return ""


def cmd_help(state: AppState, rest: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, rest: str) -> str:
    state.store.render()
    return ""


def cmd_stats(state: AppState, rest: str) -> str:
    return format_stats(state.store.stats())


def cmd_add(state: AppState, rest: str) -> str:
    return add_task(state, rest)


def cmd_toggle(state: AppState, rest: str) -> str:
    task_id = _parse_id(rest)
    if task_id is None:
        return "Usage: /toggle <id>"
    if state.store.toggle_complete(task_id) is None:
        logger.debug("toggle ignored, no task id=%s", task_id)
    return ""


def cmd_edit(state: AppState, rest: str) -> str:
    """
    /edit <id>         -> open the task for editing (then /save or /cancel)
    /edit <id> <text>  -> replace the text right away
    """
    raw_id, _, text = rest.partition(" ")
    task_id = _parse_id(raw_id)
    if task_id is None:
        return "Usage: /edit <id> [new text]"

    if text.strip():
        return _save_edit(state, task_id, text)

    task = state.store.get(task_id)
    if task is None:
        logger.debug("edit ignored, no task id=%s", task_id)
        return ""
    if task.completed:
        return "Completed tasks cannot be edited. Use /toggle first."
    state.store.set_editing(task_id)
    return ""


def cmd_save(state: AppState, rest: str) -> str:
    task = state.store.editing_task()
    if task is None:
        return "Nothing is being edited. Use /edit <id> first."
    return _save_edit(state, task.id, rest)


def cmd_cancel(state: AppState, rest: str) -> str:
    task = state.store.editing_task()
    if task is None:
        return ""
    state.store.cancel_editing(task.id)
    return ""


def cmd_delete(state: AppState, rest: str) -> str:
    task_id = _parse_id(rest)
    if task_id is None:
        return "Usage: /delete <id>"
    if state.store.get(task_id) is None:
        logger.debug("delete ignored, no task id=%s", task_id)
        return ""

    if getattr(state.settings, "confirm_deletes", True) and not state.confirm(
        "Are you sure you want to delete this task?"
    ):
        return "Delete cancelled."

    state.store.delete(task_id)
    return ""


def cmd_clear(state: AppState, rest: str) -> str:
    count = state.store.stats().completed
    if count == 0:
        return ""

    if getattr(state.settings, "confirm_deletes", True) and not state.confirm(
        f"Are you sure you want to delete {_completed_tasks(count)}?"
    ):
        return "Clear cancelled."

    removed = state.store.clear_completed()
    return f"Removed {_completed_tasks(removed)}."


def cmd_reload(state: AppState, rest: str) -> str:
    state.store.reload()
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Redraw the task list.", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show total/completed/pending counts.")
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("toggle", cmd_toggle, help_text="Mark done/undone: /toggle <id>.", aliases=["done"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> [new text].")
registry.register("save", cmd_save, help_text="Save the task being edited: /save <new text>.")
registry.register("cancel", cmd_cancel, help_text="Stop editing without changes.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all completed tasks.")
registry.register("reload", cmd_reload, help_text="Reload tasks saved by another session.")
