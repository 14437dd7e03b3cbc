# src/todo_list/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing 'Z'."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _flag(raw: Any) -> bool:
    # Only real JSON booleans count; "false", 1 and null read as False.
    return raw is True


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool
    created_at: datetime

    # UI-only flag; persisted so a reload keeps the edit row open.
    editing: bool = False

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": format_timestamp(self.created_at),
            "editing": self.editing,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Task:
        """
        Build a Task from a persisted record.

        Raises KeyError/TypeError/ValueError on malformed input; the caller
        decides whether to drop the record.
        """
        raw_id = data["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise TypeError(f"task id must be int, got {raw_id!r}")
        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError("task text must be a non-empty string")

        raw_created = data.get("createdAt")
        created_at = (
            parse_timestamp(raw_created)
            if isinstance(raw_created, str) and raw_created
            else datetime.fromtimestamp(0, tz=timezone.utc)
        )

        return cls(
            id=raw_id,
            text=text.strip(),
            completed=_flag(data.get("completed")),
            created_at=created_at,
            editing=_flag(data.get("editing")),
        )


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    pending: int

    @classmethod
    def from_tasks(cls, tasks: list[Task] | tuple[Task, ...]) -> TaskStats:
        total = len(tasks)
        completed = sum(1 for t in tasks if t.completed)
        return cls(total=total, completed=completed, pending=total - completed)
