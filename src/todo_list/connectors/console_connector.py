# src/todo_list/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import add_task
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def make_console_confirm(input_fn: InputFn = input) -> Callable[[str], bool]:
    """y/N prompt; EOF or Ctrl+C counts as 'no'."""

    def confirm(prompt: str) -> bool:
        try:
            answer = input_fn(f"{prompt} [y/N] ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            return False
        return answer in ("y", "yes")

    return confirm


def handle_line(state: AppState, line: str) -> str:
    """
    Route one line of user input.

    Slash commands go to the registry; anything else is a new task.
    """
    reply = command_registry.handle(state, line)
    if reply is None:
        reply = add_task(state, line)
    return reply


def run_console_loop(
    state: AppState,
    *,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> None:
    logger.info("Console connector started.")
    output_fn("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    state.store.render()

    while True:
        try:
            user_input = input_fn("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output_fn("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            output_fn(reply)

    logger.info("Console connector finished.")
