# tests/test_persistence.py

from __future__ import annotations

import json

from todo_list.tasks.task_store import MSG_SAVE_FAILED, TaskStore

from .fakes import FailingStorage, RecordingRenderer


def test_round_trip_into_fresh_store(store, storage) -> None:
    a = store.add("Buy milk")
    b = store.add("Walk dog")
    store.add("Read book")
    store.toggle_complete(b.id)
    store.set_editing(a.id)

    fresh = TaskStore(storage)
    assert fresh.tasks == store.tasks
    assert fresh.next_id == store.next_id == 4


def test_record_format(store, storage) -> None:
    store.add("Buy milk")
    records = json.loads(storage.data["todoApp_tasks"])
    assert records == [
        {
            "id": 1,
            "text": "Buy milk",
            "completed": False,
            "createdAt": "2024-05-01T12:00:01.000Z",
            "editing": False,
        }
    ]


def test_missing_storage_starts_empty() -> None:
    store = TaskStore(FailingStorage())
    assert store.tasks == ()
    assert store.next_id == 1


def test_corrupt_json_starts_empty() -> None:
    storage = FailingStorage({"todoApp_tasks": "{not json", "todoApp_taskIdCounter": "7"})
    store = TaskStore(storage)
    assert store.tasks == ()
    assert store.next_id == 7


def test_non_list_payload_starts_empty() -> None:
    storage = FailingStorage({"todoApp_tasks": json.dumps({"id": 1})})
    assert TaskStore(storage).tasks == ()


def test_malformed_records_are_dropped() -> None:
    records = [
        {"id": 3, "text": "good", "completed": True, "createdAt": "2024-01-01T00:00:00.000Z"},
        {"id": "x", "text": "bad id"},
        {"text": "no id"},
        "not an object",
        {"id": 2, "text": "   "},
        {"id": 1, "text": "also good"},
        {"id": 4, "text": "Buy milk"},
        {"id": 5, "text": "BUY MILK"},
        {"id": 6, "text": "x" * 201},
        {"id": 7, "text": "  " + "y" * 200 + "  "},
    ]
    store = TaskStore(FailingStorage({"todoApp_tasks": json.dumps(records)}))
    assert [(t.id, t.text) for t in store.tasks] == [
        (3, "good"),
        (1, "also good"),
        (4, "Buy milk"),
        (7, "y" * 200),
    ]
    assert store.get(3).completed is True

    folded = [t.text.casefold() for t in store.tasks]
    assert len(folded) == len(set(folded))


def test_loaded_text_limit_follows_store_setting() -> None:
    records = [{"id": 1, "text": "short"}, {"id": 2, "text": "too long"}]
    store = TaskStore(FailingStorage({"todoApp_tasks": json.dumps(records)}), max_text_length=5)
    assert [t.text for t in store.tasks] == ["short"]


def test_only_json_booleans_count_as_flags() -> None:
    records = [
        {"id": 3, "text": "string false", "completed": "false", "editing": "true"},
        {"id": 2, "text": "number one", "completed": 1},
        {"id": 1, "text": "real true", "completed": True},
    ]
    store = TaskStore(FailingStorage({"todoApp_tasks": json.dumps(records)}))
    assert [(t.id, t.completed, t.editing) for t in store.tasks] == [
        (3, False, False),
        (2, False, False),
        (1, True, False),
    ]


def test_unreadable_storage_starts_empty() -> None:
    storage = FailingStorage({"todoApp_tasks": "[]"})
    storage.fail_reads = True
    store = TaskStore(storage)
    assert store.tasks == ()
    assert store.next_id == 1


def test_lost_counter_never_reuses_ids() -> None:
    records = [{"id": 5, "text": "five"}, {"id": 2, "text": "two"}]
    storage = FailingStorage(
        {"todoApp_tasks": json.dumps(records), "todoApp_taskIdCounter": "garbage"}
    )
    store = TaskStore(storage)
    assert store.next_id == 6
    assert store.add("six").id == 6


def test_only_first_loaded_editing_flag_survives() -> None:
    records = [
        {"id": 2, "text": "b", "editing": True},
        {"id": 1, "text": "a", "editing": True},
    ]
    store = TaskStore(FailingStorage({"todoApp_tasks": json.dumps(records)}))
    assert [t.id for t in store.tasks if t.editing] == [2]


def test_persist_failure_keeps_memory_and_reports(store, storage, notifier, renderer) -> None:
    store.add("saved")
    storage.fail_writes = True

    task = store.add("only in memory")
    assert [t.text for t in store.tasks] == ["only in memory", "saved"]
    assert notifier.errors == [MSG_SAVE_FAILED]
    assert store.last_persist_error is not None
    assert renderer.last[0][0].id == task.id

    storage.fail_writes = False
    store.toggle_complete(task.id)
    assert store.last_persist_error is None
    assert "only in memory" in storage.data["todoApp_tasks"]


def test_reload_last_write_wins(storage) -> None:
    tab_a = TaskStore(storage)
    tab_b = TaskStore(storage)

    tab_a.add("from A")
    tab_b.add("from B")
    assert [t.text for t in tab_b.tasks] == ["from B"]

    renderer = RecordingRenderer()
    tab_a.renderer = renderer
    tab_a.reload()
    assert [t.text for t in tab_a.tasks] == ["from B"]
    assert [t.text for t in renderer.last[0]] == ["from B"]


def test_reload_never_moves_counter_backwards(storage) -> None:
    store = TaskStore(storage)
    store.add("one")
    store.add("two")
    storage.data["todoApp_taskIdCounter"] = "1"
    storage.data["todoApp_tasks"] = "[]"

    store.reload()
    assert store.tasks == ()
    assert store.add("three").id == 3


def test_custom_keys(storage) -> None:
    store = TaskStore(storage, tasks_key="t", counter_key="c")
    store.add("x")
    assert set(storage.data) == {"t", "c"}
