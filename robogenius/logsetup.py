"""Process-wide logging: stderr output plus one file per severity."""

from __future__ import annotations

import logging
import os
import sys
import time

_FORMAT = "[%(levelname)s %(thread)d] %(asctime)s [%(filename)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_FILE_LEVELS = (("INFO", logging.INFO), ("WARNING", logging.WARNING), ("ERROR", logging.ERROR))
_COLORS = {
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[31m",
}

_handlers: list[logging.Handler] = []
_previous_level: int | None = None


class _ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = _COLORS.get(record.levelno)
        return f"{color}{text}\033[0m" if color else text


def _timestamp() -> str:
    t = time.localtime()
    return f"{t.tm_year}-{t.tm_mon}-{t.tm_mday} {t.tm_hour}:{t.tm_min}:{t.tm_sec}"


def init(project_name: str, path: str = "./logs") -> logging.Logger:
    """Set up logging to stderr and to INFO/WARNING/ERROR files under ``path``.

    Returns the logger named ``project_name``.
    """
    global _previous_level
    shutdown()

    root = logging.getLogger()
    if not os.path.exists(path):
        root.info("log directory does not exist, creating it")
    os.makedirs(path, exist_ok=True)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    formatter_cls = _ColorFormatter if sys.stderr.isatty() else logging.Formatter
    stderr_handler.setFormatter(formatter_cls(_FORMAT, _DATE_FORMAT))

    handlers: list[logging.Handler] = [stderr_handler]
    stamp = _timestamp()
    for name, level in _FILE_LEVELS:
        handler = logging.FileHandler(os.path.join(path, f"{name}_{stamp}.log"), encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
        handlers.append(handler)

    _previous_level = root.level
    root.setLevel(logging.INFO)
    for handler in handlers:
        root.addHandler(handler)
    _handlers.extend(handlers)
    return logging.getLogger(project_name)


def shutdown() -> None:
    """Detach and close the handlers installed by :func:`init`."""
    global _previous_level
    root = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.close()
    if _previous_level is not None:
        root.setLevel(_previous_level)
        _previous_level = None