# src/todo_list/connectors/console_renderer.py

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..tasks.task_models import Task, TaskStats

EMPTY_STATE = "No tasks yet. Type something to add your first task."


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def format_task_line(task: Task) -> str:
    box = "[x]" if task.completed else "[ ]"
    if task.editing:
        return f"  {box} #{task.id:<4} (editing) {task.text}  -> /save <new text> or /cancel"
    return f"  {box} #{task.id:<4} {task.text}"


def format_stats(stats: TaskStats) -> str:
    return f"Total: {stats.total} | Completed: {stats.completed} | Pending: {stats.pending}"


def render_lines(tasks: Sequence[Task], stats: TaskStats) -> list[str]:
    lines: list[str] = []
    if not tasks:
        lines.append(EMPTY_STATE)
    else:
        lines.append("Tasks:")
        lines.extend(format_task_line(t) for t in tasks)
    lines.append(format_stats(stats))
    if stats.completed:
        lines.append(f"Use /clear to remove {_plural(stats.completed, 'completed task')}.")
    return lines


class ConsoleRenderer:
    """Renderer port for the terminal: redraws the whole list after each mutation."""

    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def render(self, tasks: Sequence[Task], stats: TaskStats) -> None:
        self._write("\n".join(render_lines(tasks, stats)))
