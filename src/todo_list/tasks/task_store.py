# tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from ..core.ports import KeyValueStorage, Notifier, Renderer
from .errors import NotFoundError, StorageError, ValidationError
from .task_models import Task, TaskStats

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "todoApp_tasks"
DEFAULT_COUNTER_KEY = "todoApp_taskIdCounter"
DEFAULT_MAX_TEXT_LENGTH = 200

MSG_EMPTY_ON_ADD = "Please enter a task description"
MSG_EMPTY_ON_EDIT = "Task description cannot be empty"
MSG_DUPLICATE = "This task already exists"
MSG_SAVE_FAILED = "Failed to save tasks. Please try again."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """
    In-memory authoritative task list backed by a key-value store.

    Layout in storage (two entries):
    - tasks_key:   JSON array of task records, newest first
    - counter_key: next id as a decimal string

    Every mutation is followed by a persistence write and a render.
    A failed write is logged and reported through the notifier, but the
    in-memory change stays: memory is authoritative for the session.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        renderer: Renderer | None = None,
        notifier: Notifier | None = None,
        tasks_key: str = DEFAULT_TASKS_KEY,
        counter_key: str = DEFAULT_COUNTER_KEY,
        max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._storage = storage
        self.renderer = renderer
        self.notifier = notifier
        self._tasks_key = tasks_key
        self._counter_key = counter_key
        self._max_text_length = int(max_text_length)
        self._clock = clock

        self.last_persist_error: str | None = None

        self._tasks: list[Task]
        self._next_id: int
        self._tasks, self._next_id = self._load_state()
        logger.info("TaskStore ready total=%d next_id=%d", len(self._tasks), self._next_id)

    # ---- loading ----

    def _load_tasks(self) -> list[Task]:
        try:
            raw = self._storage.get(self._tasks_key)
        except StorageError:
            logger.warning("Error loading tasks from storage.", exc_info=True)
            return []
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored tasks are not valid JSON; starting empty.")
            return []
        if not isinstance(data, list):
            logger.warning("Stored tasks are not a JSON array; starting empty.")
            return []

        tasks: list[Task] = []
        seen_ids: set[int] = set()
        seen_texts: set[str] = set()
        for item in data:
            if not isinstance(item, dict):
                logger.warning("Dropping non-object task record: %r", item)
                continue
            try:
                task = Task.from_record(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Dropping malformed task record %r: %s", item, e)
                continue
            if task.id in seen_ids:
                logger.warning("Dropping task record with duplicate id=%s", task.id)
                continue
            if len(task.text) > self._max_text_length:
                logger.warning(
                    "Dropping task record id=%s: text longer than %d characters",
                    task.id,
                    self._max_text_length,
                )
                continue
            folded = task.text.casefold()
            if folded in seen_texts:
                logger.warning("Dropping task record id=%s: duplicate text %r", task.id, task.text)
                continue
            seen_ids.add(task.id)
            seen_texts.add(folded)
            tasks.append(task)

        # Single-editor invariant: the first editing record wins.
        editing_seen = False
        for task in tasks:
            if task.editing:
                if editing_seen:
                    task.editing = False
                editing_seen = True
        return tasks

    def _load_counter(self) -> int:
        try:
            raw = self._storage.get(self._counter_key)
        except StorageError:
            logger.warning("Error loading task ID counter.", exc_info=True)
            return 1
        if not raw:
            return 1
        try:
            return max(1, int(raw.strip()))
        except ValueError:
            logger.warning("Stored task ID counter is not an integer: %r", raw)
            return 1

    def _load_state(self) -> tuple[list[Task], int]:
        tasks = self._load_tasks()
        next_id = self._load_counter()
        if tasks:
            next_id = max(next_id, max(t.id for t in tasks) + 1)
        return tasks, next_id

    # ---- persistence / render ----

    def _persist(self) -> bool:
        payload = json.dumps([t.to_record() for t in self._tasks], ensure_ascii=False)
        try:
            self._storage.set(self._tasks_key, payload)
            self._storage.set(self._counter_key, str(self._next_id))
        except StorageError as e:
            logger.warning("Error saving tasks to storage: %s", e)
            self.last_persist_error = str(e)
            if self.notifier is not None:
                self.notifier.show_error(MSG_SAVE_FAILED)
            return False
        self.last_persist_error = None
        return True

    def render(self) -> None:
        if self.renderer is None:
            return
        self.renderer.render(self.tasks, self.stats())

    def _commit(self) -> None:
        self._persist()
        self.render()

    # ---- helpers ----

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _validate_text(self, text: str, *, empty_message: str, exclude_id: int | None = None) -> str:
        trimmed = (text or "").strip()
        if not trimmed:
            raise ValidationError(empty_message)
        if len(trimmed) > self._max_text_length:
            raise ValidationError(
                f"Task description must be less than {self._max_text_length} characters"
            )
        folded = trimmed.casefold()
        for task in self._tasks:
            if task.id != exclude_id and task.text.casefold() == folded:
                raise ValidationError(MSG_DUPLICATE)
        return trimmed

    # ---- read API ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot copies, newest first."""
        return tuple(replace(t) for t in self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def get(self, task_id: int) -> Task | None:
        task = self._find(task_id)
        return replace(task) if task is not None else None

    def editing_task(self) -> Task | None:
        for task in self._tasks:
            if task.editing:
                return replace(task)
        return None

    def stats(self) -> TaskStats:
        return TaskStats.from_tasks(self._tasks)

    # ---- mutations ----

    def add(self, text: str) -> Task:
        """
        Validate and prepend a new task.

        Raises ValidationError if the trimmed text is empty, too long,
        or case-insensitively equal to an existing task.
        """
        trimmed = self._validate_text(text, empty_message=MSG_EMPTY_ON_ADD)

        task = Task(
            id=self._next_id,
            text=trimmed,
            completed=False,
            created_at=self._clock(),
            editing=False,
        )
        self._next_id += 1
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s", task.id)
        self._commit()
        return replace(task)

    def edit(self, task_id: int, new_text: str) -> Task:
        """
        Replace the text of an existing task and leave edit mode.

        Raises NotFoundError for an unknown id, ValidationError as in add()
        (the task itself is excluded from the duplicate check).
        """
        task = self._find(task_id)
        if task is None:
            raise NotFoundError(task_id)
        trimmed = self._validate_text(new_text, empty_message=MSG_EMPTY_ON_EDIT, exclude_id=task_id)

        task.text = trimmed
        task.editing = False
        logger.debug("Task edited id=%s", task_id)
        self._commit()
        return replace(task)

    def toggle_complete(self, task_id: int) -> Task | None:
        task = self._find(task_id)
        if task is None:
            return None
        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
        self._commit()
        return replace(task)

    def delete(self, task_id: int) -> bool:
        """Remove a task. The caller is responsible for confirming intent first."""
        task = self._find(task_id)
        if task is None:
            return False
        self._tasks = [t for t in self._tasks if t.id != task_id]
        logger.debug("Task deleted id=%s", task_id)
        self._commit()
        return True

    def clear_completed(self) -> int:
        """Remove every completed task; returns how many were removed."""
        removed = sum(1 for t in self._tasks if t.completed)
        if removed == 0:
            return 0
        self._tasks = [t for t in self._tasks if not t.completed]
        logger.debug("Cleared %d completed tasks", removed)
        self._commit()
        return removed

    def set_editing(self, task_id: int) -> bool:
        task = self._find(task_id)
        if task is None:
            return False
        for other in self._tasks:
            other.editing = False
        task.editing = True
        self._commit()
        return True

    def cancel_editing(self, task_id: int) -> bool:
        task = self._find(task_id)
        if task is None:
            return False
        task.editing = False
        self._commit()
        return True

    def reload(self) -> None:
        """
        Replace in-memory state with whatever is in storage now.

        Last write wins: unsaved changes in this instance are discarded.
        The id counter never moves backwards within a session.
        """
        tasks, next_id = self._load_state()
        self._tasks = tasks
        self._next_id = max(self._next_id, next_id)
        logger.info("TaskStore reloaded total=%d next_id=%d", len(self._tasks), self._next_id)
        self.render()
