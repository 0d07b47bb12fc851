"""Timers that re-schedule commands after a delay."""

from __future__ import annotations

import bisect
import itertools
import threading
from typing import Any

from robogenius.util import get_current_ms

_ROLLOVER_MS = 60 * 60 * 1000
_sequence = itertools.count()


class Timer:
    """A command due at :attr:`next` (epoch ms), optionally every :attr:`ms`."""

    def __init__(
        self,
        ms: int,
        command: Any = None,
        recurring: bool = False,
        manager: TimerManager | None = None,
    ) -> None:
        self.ms = ms
        self.command = command
        self.recurring = recurring
        self.manager = manager
        self.next = get_current_ms() + ms
        self._seq = next(_sequence)

    def _key(self) -> tuple[int, int]:
        return (self.next, self._seq)

    def set_command(self, command: Any) -> None:
        self.command = command

    def cancel(self) -> bool:
        """Remove the timer from its manager; False if it holds no command."""
        if self.manager is None:
            return self.command is not None
        with self.manager._lock:
            if self.command is None:
                return False
            self.manager._discard(self)
            return True


class TimerManager:
    """Ordered set of timers."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._timers: list[Timer] = []
        self._tickled = False
        self._previous_time = get_current_ms()

    def _discard(self, timer: Timer) -> None:
        index = bisect.bisect_left(self._timers, timer._key(), key=Timer._key)
        if index < len(self._timers) and self._timers[index] is timer:
            del self._timers[index]

    def _insert(self, timer: Timer) -> int:
        index = bisect.bisect_left(self._timers, timer._key(), key=Timer._key)
        self._timers.insert(index, timer)
        return index

    def add_timer(self, ms: int, command: Any, recurring: bool = False) -> Timer:
        """Create a timer for ``command`` firing after ``ms`` milliseconds."""
        timer = Timer(ms, command, recurring, self)
        with self._lock:
            at_front = self._insert(timer) == 0 and not self._tickled
            self._tickled = at_front
        if at_front:
            self.on_timer_inserted_at_front()
        return timer

    def get_next_timer(self) -> int | None:
        """Milliseconds until the earliest timer, 0 if due, None if there is none."""
        with self._lock:
            self._tickled = False
            if not self._timers:
                return None
            now_ms = get_current_ms()
            due = self._timers[0].next
            return 0 if now_ms >= due else due - now_ms

    def has_timer(self) -> bool:
        with self._lock:
            return bool(self._timers)

    def _detect_clock_rollover(self, now_ms: int) -> bool:
        rollover = now_ms < self._previous_time and now_ms < self._previous_time - _ROLLOVER_MS
        self._previous_time = now_ms
        return rollover

    def list_expired(self) -> list[Any]:
        """Pop due timers and return their commands; recurring ones are re-armed."""
        now_ms = get_current_ms()
        with self._lock:
            if not self._timers:
                return []
            rollover = self._detect_clock_rollover(now_ms)
            if not rollover and self._timers[0].next > now_ms:
                return []
            if rollover:
                count = len(self._timers)
            else:
                count = bisect.bisect_right(self._timers, now_ms, key=lambda t: t.next)
            expired = self._timers[:count]
            del self._timers[:count]
            commands = []
            for timer in expired:
                commands.append(timer.command)
                if timer.recurring:
                    timer.next = now_ms + timer.ms
                    self._insert(timer)
                else:
                    timer.command = None
            return commands

    def on_timer_inserted_at_front(self) -> None:
        """Hook called when a new timer becomes the earliest one."""