# src/todo_list/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_store import TaskStore
from .messages import MessageBoard


def _always_confirm(_prompt: str) -> bool:
    return True


@dataclass
class AppState:
    """
    Everything one running session owns, built once by the composition root.

    `confirm` asks the user a yes/no question (delete / clear completed);
    connectors replace it with an interactive prompt.
    """

    settings: Any
    store: TaskStore
    messages: MessageBoard
    confirm: Callable[[str], bool] = field(default=_always_confirm)
