# src/todo_list/tasks/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for all todo-list errors."""


class ValidationError(TodoError):
    """Task text was rejected (empty, too long or duplicate). Message is user-facing."""


class NotFoundError(TodoError):
    """No task with the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: id={task_id}")
        self.task_id = task_id


class StorageError(TodoError):
    """Key-value backend failed to read or write."""
