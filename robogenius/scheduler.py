"""Cooperative command scheduler with timers and worker threads."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Iterable

from robogenius.command import Command, State
from robogenius.timer import TimerManager
from robogenius.util import get_thread_id

_log = logging.getLogger(__name__)

_MAX_TIMEOUT_MS = 3000
_local = threading.local()


def handle_command(cmd: Command) -> None:
    """Advance ``cmd`` by one step of its life cycle."""
    state = cmd.state
    if state == State.WAIT:
        cmd.schedule()
        cmd.state = State.INIT
    elif state == State.INIT:
        cmd.initialize()
        if cmd.is_finished():
            cmd.state = State.FINISHED
            if cmd.parent is not None:
                cmd.parent.state = State.RUNNING
                cmd.parent.schedule()
        cmd.schedule()
        cmd.state = State.RUNNING
    elif state == State.RUNNING:
        if cmd.is_finished():
            cmd.state = State.FINISHED
        elif cmd.state != State.PAUSED:
            cmd.execute()
        if cmd.state != State.PAUSED:
            cmd.schedule()
    elif state == State.CANCELED:
        cmd.cancel()
    elif state == State.FINISHED:
        cmd.end()
        if cmd.parent is not None:
            if cmd.parent.state != State.STOP:
                cmd.parent.state = State.RUNNING
                cmd.parent.schedule()
            cmd.parent = None
        cmd.state = State.STOP
    else:
        _log.error("unhandled command state: %d", int(state))


class Scheduler(TimerManager):
    """Runs queued commands on worker threads and, on :meth:`stop`, the caller."""

    _instance: Scheduler | None = None
    _instance_lock = threading.Lock()

    def __init__(self, threads: int = 1, use_caller: bool = True, name: str = "main") -> None:
        super().__init__()
        self.name = name
        self._lock = threading.RLock()
        self._commands: deque[Command] = deque()
        self._wakeup = threading.Event()
        self._threads: list[threading.Thread] = []
        self.thread_ids: list[int] = []
        self._in_run_loop = False
        self._stopping = True
        self._auto_stop = False
        self._active = 0
        if use_caller:
            threads -= 1
            _local.scheduler = self
            self.thread_ids.append(get_thread_id())
        self.thread_count = threads

    @classmethod
    def get_instance(
        cls, threads: int = 1, use_caller: bool = True, name: str = "main"
    ) -> Scheduler:
        """Return the process-wide scheduler, created on first use with these arguments."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(threads, use_caller, name)
            return cls._instance

    @staticmethod
    def current() -> Scheduler | None:
        """Return the scheduler bound to the calling thread, if any."""
        return getattr(_local, "scheduler", None)

    def start(self) -> None:
        """Start the worker threads; commands are accepted from now on."""
        with self._lock:
            if not self._stopping:
                return
            self._stopping = False
            self._in_run_loop = True
            for i in range(self.thread_count):
                thread = threading.Thread(target=self.run, name=f"{self.name}_{i}", daemon=True)
                thread.start()
                self._threads.append(thread)
                self.thread_ids.append(thread.native_id)
        _log.info("scheduler started")

    def stop(self) -> None:
        """Run the calling thread until all work is done, then join the workers."""
        self._auto_stop = True
        self.run()
        if self.thread_count == 0:
            _log.info("scheduler %s stopped", self.name)
            return
        for _ in range(self.thread_count):
            self.tickle()
        with self._lock:
            threads, self._threads = self._threads, []
        for thread in threads:
            thread.join()
        _log.info("scheduler stopped")

    def schedule(self, command: Command | Iterable[Command]) -> bool:
        """Queue a command, or several; False if one is refused.

        A command is refused when the scheduler is not running or it is
        already queued. With several, queuing stops at the first refusal.
        """
        if not isinstance(command, Command):
            result = True
            for item in command:
                result = result and self.schedule(item)
            return result
        with self._lock:
            if not self._in_run_loop:
                return False
            if any(queued is command for queued in self._commands):
                return False
            self._commands.append(command)
        self.tickle()
        return True

    def run(self) -> None:
        """Process queued commands until the scheduler is told to stop."""
        self._in_run_loop = True
        _local.scheduler = self
        while True:
            cmd: Command | None = None
            with self._lock:
                if self._commands and self._commands[0] is not None:
                    cmd = self._commands.popleft()
                    self._active += 1
                if self._stopping and cmd is None:
                    break
            if cmd is not None:
                self.tickle()
                try:
                    handle_command(cmd)
                finally:
                    with self._lock:
                        self._active -= 1
            with self._lock:
                if (
                    self._auto_stop
                    and cmd is None
                    and not self._commands
                    and not self.has_timer()
                    and self._active <= 0
                ):
                    break
            self.idle()

    def tickle(self) -> None:
        """Wake threads waiting in :meth:`idle`."""
        self._wakeup.set()

    def idle(self) -> None:
        """Wait for work or the next timer, then queue the commands of due timers."""
        next_timeout = self.get_next_timer()
        timeout = _MAX_TIMEOUT_MS if next_timeout is None else min(next_timeout, _MAX_TIMEOUT_MS)
        if self._wakeup.wait(timeout / 1000):
            self._wakeup.clear()
        expired = self.list_expired()
        for cmd in expired:
            if cmd.state == State.PAUSED:
                cmd.state = State.RUNNING
        if expired:
            self.schedule(expired)
            for _ in expired:
                self.tickle()

    def on_timer_inserted_at_front(self) -> None:
        self.tickle()