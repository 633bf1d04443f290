"""Named, system-wide lock marking an updater as active.

The lock is an OS file lock on a file whose name is derived from
GUARD_NAME, so every process of the product (old or new version) contends
for the same file. Acquisition is a single non-blocking attempt. The owner
keeps the lock until it calls release() or exits; the OS drops it if the
owner dies.
"""

import logging
import os
import sys
import tempfile
import time
from pathlib import Path
from typing import IO, Final

from autoupgrade.errors import GuardError

logger = logging.getLogger(__name__)

# Must stay the same across releases so an old updater still blocks a new one
GUARD_NAME: Final = "autoupgrade.updater"

# Pause between attempts in acquire_within()
RETRY_INTERVAL: Final = 0.1


def _lock_path(name: str, lock_dir: Path | None) -> Path:
    return (lock_dir or Path(tempfile.gettempdir())) / f"{name}.lock"


def _try_lock(handle: IO[str]) -> bool:
    if sys.platform.startswith("win"):
        import msvcrt  # type: ignore

        handle.seek(0)
        try:
            msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
        except OSError:
            return False
        return True

    import fcntl  # type: ignore

    try:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except (BlockingIOError, PermissionError):
        return False
    return True


def _unlock(handle: IO[str]) -> None:
    if sys.platform.startswith("win"):
        import msvcrt  # type: ignore

        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        import fcntl  # type: ignore

        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


class SingleInstanceGuard:
    """Product-wide lock held by whichever updater is currently running."""

    def __init__(self, name: str = GUARD_NAME, lock_dir: Path | None = None):
        self.name = name
        self.path = _lock_path(name, lock_dir)
        self._handle: IO[str] | None = None

    @property
    def held(self) -> bool:
        """True while this instance owns the lock."""
        return self._handle is not None

    def acquire(self) -> bool:
        """Try once to take the lock.

        Returns:
            True if this instance now owns the lock (or already did), False
            if another holder exists.

        Raises:
            GuardError: If the lock file cannot be created or opened.
        """
        if self._handle is not None:
            return True

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            handle = self.path.open("a+", encoding="utf-8")
        except OSError as e:
            raise GuardError(self.path, str(e)) from e

        if not _try_lock(handle):
            handle.close()
            logger.debug("Guard %s is held by another process", self.name)
            return False

        # Record the owner for diagnostics only
        handle.seek(0)
        handle.truncate()
        handle.write(str(os.getpid()))
        handle.flush()

        self._handle = handle
        logger.debug("Acquired guard %s (%s)", self.name, self.path)
        return True

    def acquire_within(self, timeout: float, interval: float = RETRY_INTERVAL) -> bool:
        """Retry acquire() until it succeeds or ``timeout`` seconds pass.

        A timeout of 0 makes a single attempt.
        """
        deadline = time.monotonic() + timeout
        while not self.acquire():
            if time.monotonic() >= deadline:
                return False
            time.sleep(interval)
        return True

    def release(self) -> None:
        """Give the lock up and close the underlying file. Safe to call twice."""
        handle = self._handle
        if handle is None:
            return

        self._handle = None
        try:
            _unlock(handle)
        finally:
            handle.close()
        logger.debug("Released guard %s", self.name)

    def owner_pid(self) -> int | None:
        """PID written by the current holder, if readable."""
        try:
            text = self.path.read_text(encoding="utf-8").strip()
        except OSError:
            return None
        return int(text) if text.isdigit() else None

    def __enter__(self) -> "SingleInstanceGuard":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"SingleInstanceGuard(name={self.name!r}, held={self.held})"


def is_guard_held(guard: SingleInstanceGuard) -> bool:
    """Report whether some other process owns the guard.

    When the guard is free this call takes it, and ``guard`` keeps owning it
    until released explicitly.
    """
    return not guard.acquire()
