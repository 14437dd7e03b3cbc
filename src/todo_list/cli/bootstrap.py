# src/todo_list/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage, renderer and message board into a TaskStore,
- returns the AppState owned by the entrypoint.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import get_settings
from ..connectors.console_renderer import ConsoleRenderer
from ..core.messages import MessageBoard
from ..core.ports import KeyValueStorage, Renderer
from ..core.state import AppState
from ..storage.kv_store import MemoryKeyValueStorage, SqliteKeyValueStorage
from ..tasks.errors import StorageError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

MSG_STORAGE_UNAVAILABLE = "Could not open task storage. Changes will not be saved this session."


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> KeyValueStorage:
    """
    Pick the storage backend for this session.

    Raises StorageError/OSError when the on-disk store cannot be opened.
    """
    if getattr(settings, "ephemeral", False):
        logger.info("Ephemeral mode: tasks are kept in memory only.")
        return MemoryKeyValueStorage()
    _ensure_local_dirs(settings)
    return SqliteKeyValueStorage(settings.storage_path)


def create_initial_state(
    *,
    settings=None,
    storage: KeyValueStorage | None = None,
    renderer: Renderer | None = None,
    write: Callable[[str], None] = print,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/storage/renderer injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back
    to get_settings().

    An unusable storage path does not stop the app: the session continues
    in memory and the message board shows a warning.
    """
    if settings is None:
        settings = get_settings()

    def _show_message(message: str) -> None:
        if message:
            write(f"[!] {message}")

    messages = MessageBoard(clear_after=settings.error_clear_seconds, on_change=_show_message)

    if storage is None:
        try:
            storage = create_storage(settings)
        except (StorageError, OSError) as e:
            logger.warning("Task storage unavailable, keeping tasks in memory only: %s", e)
            messages.show_error(MSG_STORAGE_UNAVAILABLE)
            storage = MemoryKeyValueStorage()

    store = TaskStore(
        storage,
        renderer=renderer if renderer is not None else ConsoleRenderer(write),
        notifier=messages,
        tasks_key=settings.tasks_key,
        counter_key=settings.counter_key,
        max_text_length=settings.max_text_length,
    )
    return AppState(settings=settings, store=store, messages=messages)
