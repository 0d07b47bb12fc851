"""Base class for commands run by the scheduler."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any


class State(IntEnum):
    """Life-cycle state of a command."""

    WAIT = 0
    INIT = 1
    RUNNING = 2
    PAUSED = 3
    FINISHED = 4
    CANCELED = 5
    STOP = 6


class Command(ABC):
    """A unit of work stepped by the scheduler until it reports it is finished.

    Subclasses implement :meth:`execute` and set :attr:`finished` when done.
    A command with a :attr:`parent` hands control back to it when it ends.
    """

    def __init__(self) -> None:
        self.state = State.WAIT
        self.finished = False
        self.parent: Command | None = None
        self.work_command: Command | None = None
        self.timer: Any = None

    def initialize(self) -> None:
        """Called once before the first :meth:`execute`."""

    @abstractmethod
    def execute(self) -> None:
        """Perform one step of work."""

    def end(self) -> None:
        """Called once after the command has finished."""

    def cancel(self) -> None:
        """End the command and stop it."""
        self.end()
        self.state = State.STOP

    def is_finished(self) -> bool:
        return self.finished

    def schedule(self) -> bool:
        """Queue the command on the current scheduler; False if not accepted."""
        from robogenius.scheduler import Scheduler

        scheduler = Scheduler.current() or Scheduler.get_instance()
        return scheduler.schedule(self)