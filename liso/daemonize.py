"""Detaching the server from its terminal, guarded by a lock file."""

from __future__ import annotations

import errno
import fcntl
import os
import signal
from pathlib import Path
from typing import Optional, Union


def acquire_lock(lock_file: Union[str, Path]) -> Optional[int]:
    """Lock ``lock_file`` and record this process id in it.

    Returns the open descriptor holding the lock, or None when another
    process already holds it.
    """
    fd = os.open(lock_file, os.O_RDWR | os.O_CREAT, 0o640)
    try:
        fcntl.lockf(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError as exc:
        os.close(fd)
        if exc.errno in (errno.EACCES, errno.EAGAIN):
            return None
        raise
    os.ftruncate(fd, 0)
    os.write(fd, f"{os.getpid()}\n".encode("ascii"))
    return fd


def _handle_signal(signum, frame) -> None:
    # SIGHUP and SIGTERM are caught so that they do not end the process.
    return None


def _detach_session() -> None:
    """Start a new session, leaving the controlling terminal behind."""
    try:
        os.setsid()
    except PermissionError:
        # Already a process group leader: the session cannot be changed,
        # so the process keeps running in its current one.
        pass


def daemonize(lock_file: Union[str, Path]) -> int:
    """Detach from the terminal; only the first instance keeps running.

    Returns the descriptor that holds the lock in the surviving process.
    """
    _detach_session()
    os.closerange(0, os.sysconf("SC_OPEN_MAX"))
    null = os.open(os.devnull, os.O_RDWR)
    os.dup(null)
    os.dup(null)
    os.umask(0o027)

    try:
        lock = acquire_lock(lock_file)
    except OSError:
        os._exit(1)
    if lock is None:
        os._exit(0)

    signal.signal(signal.SIGCHLD, signal.SIG_IGN)
    signal.signal(signal.SIGHUP, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)
    return lock