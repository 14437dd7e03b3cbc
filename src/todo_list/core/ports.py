# src/todo_list/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The TaskStore depends on Protocols instead of concrete implementations.
This keeps storage backends and renderers swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task, TaskStats


class KeyValueStorage(Protocol):
    """
    Durable string key -> string value store.

    Implementations raise StorageError on backend failure.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class Renderer(Protocol):
    """Receives the full task list (newest first) plus stats after every mutation."""

    def render(self, tasks: Sequence[Task], stats: TaskStats) -> None: ...


class Notifier(Protocol):
    """Where non-fatal user-facing messages go (validation failures, save warnings)."""

    def show_error(self, message: str) -> None: ...
