"""Clock helpers and small file-system utilities."""

from __future__ import annotations

import os
import re
import stat
import threading
import time
from typing import IO

_DIR_MODE = 0o775
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_thread_id() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


def get_current_ms() -> int:
    """Return wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def get_current_us() -> int:
    """Return wall-clock time in microseconds since the epoch."""
    return time.time_ns() // 1_000


def list_all_file(path: str, suffix: str = "") -> list[str]:
    """Return regular files under ``path``, recursively, ending with ``suffix``.

    Symbolic links are neither followed nor listed.
    """
    if not os.path.exists(path):
        return []
    try:
        entries = list(os.scandir(path))
    except OSError:
        return []
    files: list[str] = []
    for entry in entries:
        full = f"{path}/{entry.name}"
        if entry.is_dir(follow_symlinks=False):
            files.extend(list_all_file(full, suffix))
        elif entry.is_file(follow_symlinks=False):
            if not suffix or entry.name.endswith(suffix):
                files.append(full)
    return files


def _exists_no_follow(path: str) -> bool:
    try:
        os.lstat(path)
    except OSError:
        return False
    return True


def mkdir(dirname: str) -> bool:
    """Create ``dirname`` and any missing parents; True if it exists afterwards."""
    if _exists_no_follow(dirname):
        return True
    try:
        os.makedirs(dirname, mode=_DIR_MODE, exist_ok=True)
    except OSError:
        return False
    return True


def is_running_pid_file(pid_file: str) -> bool:
    """Return True if ``pid_file`` names a live process other than init."""
    if not _exists_no_follow(pid_file):
        return False
    try:
        with open(pid_file, encoding="utf-8") as handle:
            line = handle.readline()
    except OSError:
        return False
    line = line.rstrip("\n")
    if not line:
        return False
    match = _LEADING_INT.match(line)
    pid = int(match.group(1)) if match else 0
    if pid <= 1:
        return False
    try:
        os.kill(pid, 0)
    except OSError:
        return False
    return True


def unlink(filename: str, exist: bool = False) -> bool:
    """Remove a file.

    A missing file counts as success unless ``exist`` is set.
    """
    if not exist and not _exists_no_follow(filename):
        return True
    try:
        os.unlink(filename)
    except OSError:
        return False
    return True


def rm(path: str) -> bool:
    """Remove a file or a directory tree; a missing path counts as success."""
    try:
        st = os.lstat(path)
    except OSError:
        return True
    if not stat.S_ISDIR(st.st_mode):
        return unlink(path)
    try:
        names = os.listdir(path)
    except OSError:
        return False
    ok = all([rm(f"{path}/{name}") for name in names])
    try:
        os.rmdir(path)
    except OSError:
        ok = False
    return ok


def mv(src: str, dst: str) -> bool:
    """Move ``src`` to ``dst``, removing whatever ``dst`` held first."""
    if not rm(dst):
        return False
    try:
        os.rename(src, dst)
    except OSError:
        return False
    return True


def realpath(path: str) -> str | None:
    """Return the canonical absolute path of an existing ``path``, else None."""
    if not _exists_no_follow(path):
        return None
    try:
        return os.path.realpath(path, strict=True)
    except OSError:
        return None


def symlink(src: str, dst: str) -> bool:
    """Make ``dst`` a symbolic link to ``src``, replacing what ``dst`` held."""
    if not rm(dst):
        return False
    try:
        os.symlink(src, dst)
    except OSError:
        return False
    return True


def dirname(filename: str) -> str:
    """Return the directory part of a slash-separated path."""
    if not filename:
        return "."
    pos = filename.rfind("/")
    if pos == 0:
        return "/"
    if pos < 0:
        return "."
    return filename[:pos]


def basename(filename: str) -> str:
    """Return the part of a slash-separated path after the last slash."""
    pos = filename.rfind("/")
    return filename if pos < 0 else filename[pos + 1 :]


def open_for_read(filename: str, mode: str = "r") -> IO:
    """Open ``filename`` for reading."""
    return open(filename, mode)


def open_for_write(filename: str, mode: str = "w") -> IO:
    """Open ``filename`` for writing, creating its directory when missing."""
    try:
        return open(filename, mode)
    except OSError:
        mkdir(dirname(filename))
        return open(filename, mode)