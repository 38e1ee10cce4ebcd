"""Files with advisory read/write locks, held per process via POSIX record locks."""

from __future__ import annotations

import errno
import fcntl
import logging
import os
from enum import IntEnum
from typing import IO

_log = logging.getLogger(__name__)

_OPEN_FLAGS = {
    "r": os.O_RDONLY,
    "r+": os.O_RDWR | os.O_CREAT,
    "a": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    "a+": os.O_RDWR | os.O_CREAT | os.O_APPEND,
}

_CONTENTION_ERRNOS = {errno.EINTR, errno.EAGAIN, errno.EACCES}


class LockMode(IntEnum):
    """Kind of lock held on a file."""

    NO_LOCK = 0
    READ_LOCK = 1
    WRITE_LOCK = 2


class LockedFileError(OSError):
    """Raised when a locked file is misused or locking fails unexpectedly."""


class LockedFile:
    """A file that can hold an advisory read or write lock.

    Many processes may hold a read lock on the same file at once; exactly one
    may hold a write lock, and never together with a read lock. The lock is
    released when the file is closed or the process ends.
    """

    def __init__(self, name: str | os.PathLike[str]) -> None:
        self.name = os.fspath(name)
        self._file: IO | None = None
        self._lock_mode = LockMode.NO_LOCK

    @property
    def is_open(self) -> bool:
        return self._file is not None

    @property
    def file(self) -> IO:
        """The underlying file object."""
        if self._file is None:
            raise LockedFileError(f"{self.name}: file is not opened")
        return self._file

    def open(self, mode: str = "r+") -> "LockedFile":
        """Open the file; "r+" and "a"/"a+" create it if missing.

        Truncating modes are refused, since truncation would change the file
        before a write lock could be taken.
        """
        if self._file is not None:
            raise LockedFileError(f"{self.name}: file is already open")
        base = mode.replace("b", "").replace("t", "")
        if "w" in base:
            raise LockedFileError(f"{self.name}: truncate mode not allowed")
        try:
            flags = _OPEN_FLAGS[base]
        except KeyError:
            raise ValueError(f"unsupported open mode: {mode!r}") from None
        fd = os.open(self.name, flags, 0o666)
        try:
            self._file = os.fdopen(fd, mode)
        except BaseException:
            os.close(fd)
            raise
        return self

    def close(self) -> None:
        """Release any lock and close the file."""
        if self._file is None:
            return
        try:
            self.unlock()
        finally:
            self._file.close()
            self._file = None
            self._lock_mode = LockMode.NO_LOCK

    def lock(self, mode: LockMode, block: bool = True) -> bool:
        """Take a lock of the given kind.

        Returns True if the file is locked in that mode afterwards, and False
        if block is false and the lock is held elsewhere. A different lock
        already held by this object is released first.
        """
        handle = self.file
        mode = LockMode(mode)
        if mode is LockMode.NO_LOCK:
            return self.unlock()
        if mode is self._lock_mode:
            return True
        if self._lock_mode is not LockMode.NO_LOCK:
            self.unlock()

        operation = fcntl.LOCK_SH if mode is LockMode.READ_LOCK else fcntl.LOCK_EX
        if not block:
            operation |= fcntl.LOCK_NB
        try:
            fcntl.lockf(handle.fileno(), operation)
        except OSError as exc:
            if exc.errno in _CONTENTION_ERRNOS:
                return False
            raise LockedFileError(exc.errno, f"lock failed: {exc.strerror}", self.name) from exc
        self._lock_mode = mode
        return True

    def unlock(self) -> bool:
        """Release the lock held by this object, if any."""
        handle = self.file
        if not self.is_locked():
            return True
        try:
            fcntl.lockf(handle.fileno(), fcntl.LOCK_UN)
        except OSError as exc:
            raise LockedFileError(exc.errno, f"unlock failed: {exc.strerror}", self.name) from exc
        self._lock_mode = LockMode.NO_LOCK
        return True

    def is_locked(self) -> bool:
        return self._lock_mode is not LockMode.NO_LOCK

    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def __enter__(self) -> "LockedFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()