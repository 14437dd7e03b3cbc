# tests/test_bootstrap.py

from __future__ import annotations

from todo_list.cli.bootstrap import MSG_STORAGE_UNAVAILABLE, create_initial_state
from todo_list.storage.kv_store import MemoryKeyValueStorage, SqliteKeyValueStorage
from todo_list.tasks.task_store import MSG_SAVE_FAILED

from .fakes import FailingStorage


def test_bootstrap_uses_sqlite_under_data_dir(settings) -> None:
    out: list[str] = []
    state = create_initial_state(settings=settings, write=out.append)
    state.store.add("persist me")

    assert settings.storage_path.exists()
    again = create_initial_state(settings=settings, write=out.append)
    assert [t.text for t in again.store.tasks] == ["persist me"]
    assert isinstance(SqliteKeyValueStorage(settings.storage_path).get("todoApp_tasks"), str)
    state.messages.shutdown()
    again.messages.shutdown()


def test_bootstrap_ephemeral(settings) -> None:
    settings.ephemeral = True
    state = create_initial_state(settings=settings, write=lambda _: None)
    state.store.add("gone on exit")
    assert not settings.storage_path.exists()
    state.messages.shutdown()


def test_bootstrap_wires_messages_and_renderer(settings) -> None:
    settings.error_clear_seconds = 0
    storage = FailingStorage()
    out: list[str] = []
    state = create_initial_state(settings=settings, storage=storage, write=out.append)

    state.store.add("x")
    assert out[-1].startswith("Tasks:")

    storage.fail_writes = True
    state.store.add("y")
    assert f"[!] {MSG_SAVE_FAILED}" in out
    assert state.messages.message == MSG_SAVE_FAILED


def test_bootstrap_accepts_memory_storage(settings) -> None:
    state = create_initial_state(
        settings=settings, storage=MemoryKeyValueStorage(), write=lambda _: None
    )
    assert state.store.tasks == ()


def test_unopenable_storage_falls_back_to_memory(settings) -> None:
    settings.error_clear_seconds = 0
    # A directory where the database file should be.
    settings.storage_path.mkdir()
    out: list[str] = []

    state = create_initial_state(settings=settings, write=out.append)
    assert f"[!] {MSG_STORAGE_UNAVAILABLE}" in out

    task = state.store.add("still works")
    assert [t.text for t in state.store.tasks] == ["still works"]
    assert state.store.last_persist_error is None
    assert state.store.get(task.id) is not None


def test_uncreatable_data_dir_falls_back_to_memory(settings, tmp_path) -> None:
    settings.error_clear_seconds = 0
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", "utf-8")
    settings.data_dir = blocker
    settings.storage_path = blocker / "storage.sqlite3"

    state = create_initial_state(settings=settings, write=lambda _: None)
    assert state.messages.message == MSG_STORAGE_UNAVAILABLE
    state.store.add("in memory")
    assert len(state.store.tasks) == 1
