# src/todo_list/core/messages.py

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class _Timer(Protocol):
    daemon: bool

    def start(self) -> None: ...
    def cancel(self) -> None: ...
    def is_alive(self) -> bool: ...


TimerFactory = Callable[[float, Callable[[], None]], _Timer]


class MessageBoard:
    """
    Single transient message line (validation errors, save warnings).

    show_error() replaces the current message and schedules a clear after
    `clear_after` seconds. Each clear timer wipes whatever is current when
    it fires, so an older timer can clear a newer message early.
    """

    def __init__(
        self,
        *,
        clear_after: float = 3.0,
        timer_factory: TimerFactory = threading.Timer,
        on_change: Callable[[str], None] | None = None,
    ) -> None:
        self.clear_after = float(clear_after)
        self._timer_factory = timer_factory
        self._on_change = on_change
        self._lock = threading.Lock()
        self._message = ""
        self._timers: list[_Timer] = []

    @property
    def message(self) -> str:
        with self._lock:
            return self._message

    def show_error(self, message: str) -> None:
        with self._lock:
            self._message = message
        logger.debug("Message shown: %s", message)
        if self._on_change is not None:
            self._on_change(message)

        if self.clear_after <= 0:
            return
        timer = self._timer_factory(self.clear_after, self.clear)
        timer.daemon = True
        with self._lock:
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()

    def clear(self) -> None:
        with self._lock:
            had_message = bool(self._message)
            self._message = ""
        if had_message and self._on_change is not None:
            self._on_change("")

    def shutdown(self) -> None:
        """Cancel pending clear timers (called on exit)."""
        with self._lock:
            timers, self._timers = self._timers, []
        for timer in timers:
            timer.cancel()
