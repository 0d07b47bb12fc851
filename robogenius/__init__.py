"""Command scheduling, timers, PID control, configuration and helpers for small mobile robots."""

__version__ = "0.1.0"

__all__ = [
    "command",
    "config",
    "logsetup",
    "params",
    "pid",
    "scheduler",
    "timer",
    "util",
    "vision",
]