"""Ordered collection of pending timer events."""

from __future__ import annotations

import bisect
import itertools
import threading

from rocketrpc.log import debug_log
from rocketrpc.timer_event import TimerEvent
from rocketrpc.util import get_now_ms


class Timer:
    """Keeps timer events ordered by arrive time and runs those that are due."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: list[tuple[int, int, TimerEvent]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def add_timer_event(self, event: TimerEvent) -> None:
        """Schedule event at its arrive time."""
        with self._lock:
            bisect.insort(self._pending, (event.arrive_time, next(self._seq), event))

    def delete_timer_event(self, event: TimerEvent) -> None:
        """Cancel event and remove it from the schedule."""
        event.cancelled = True
        with self._lock:
            self._pending = [entry for entry in self._pending if entry[2] is not event]
        debug_log("success delete TimerEvent at arrive time %d", event.arrive_time)

    def on_timer(self) -> None:
        """Run every due event that is not cancelled; reschedule repeating ones."""
        now = get_now_ms()
        with self._lock:
            split = bisect.bisect_right(self._pending, now, key=lambda entry: entry[0])
            due = self._pending[:split]
            del self._pending[:split]

        fired = [event for _, _, event in due if not event.cancelled]
        callbacks = [event.callback for event in fired]
        for event in fired:
            if event.is_repeated:
                event.reset_arrive_time()
                self.add_timer_event(event)

        for callback in callbacks:
            if callback is not None:
                callback()

    def next_timeout_ms(self) -> int | None:
        """Milliseconds until the earliest event, 0 if one is due, None if none."""
        with self._lock:
            if not self._pending:
                return None
            first = self._pending[0][0]
        return max(first - get_now_ms(), 0)