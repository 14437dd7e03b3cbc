# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_list.core.messages import MessageBoard
from todo_list.core.state import AppState
from todo_list.tasks.task_store import TaskStore

from .fakes import FailingStorage, FakeTimerFactory, RecordingNotifier, RecordingRenderer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="WARNING",
        data_dir=tmp_path,
        storage_path=tmp_path / "storage.sqlite3",
        tasks_key="todoApp_tasks",
        counter_key="todoApp_taskIdCounter",
        max_text_length=200,
        error_clear_seconds=3.0,
        confirm_deletes=True,
        ephemeral=False,
    )


@pytest.fixture()
def clock():
    """Deterministic clock: each call is one second after the previous one."""
    start = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
    ticks = {"n": 0}

    def now() -> datetime:
        ticks["n"] += 1
        return start + timedelta(seconds=ticks["n"])

    return now


@pytest.fixture()
def storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def store(storage, renderer, notifier, clock) -> TaskStore:
    return TaskStore(storage, renderer=renderer, notifier=notifier, clock=clock)


@pytest.fixture()
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture()
def state(settings, storage, renderer, clock, timers) -> AppState:
    """
    AppState wired with deterministic fakes.

    The message board is the store's notifier here, as in the real bootstrap.
    """
    messages = MessageBoard(clear_after=settings.error_clear_seconds, timer_factory=timers)
    store = TaskStore(storage, renderer=renderer, notifier=messages, clock=clock)
    return AppState(settings=settings, store=store, messages=messages)
