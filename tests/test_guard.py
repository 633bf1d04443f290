"""Tests for the single-instance guard."""

import os
import threading
import time
from pathlib import Path

import pytest

from autoupgrade.errors import GuardError
from autoupgrade.guard import GUARD_NAME, SingleInstanceGuard, is_guard_held


class TestSingleInstanceGuard:
    """Tests for SingleInstanceGuard."""

    def test_default_name_is_product_scoped(self):
        """Every instance uses the same fixed lock name by default."""
        a = SingleInstanceGuard()
        b = SingleInstanceGuard()
        assert a.name == GUARD_NAME
        assert a.path == b.path
        assert a.path.name == f"{GUARD_NAME}.lock"

    def test_acquire_free_guard(self, guard: SingleInstanceGuard):
        """A free guard is taken and reported as held."""
        assert not guard.held
        assert guard.acquire()
        assert guard.held
        assert guard.path.exists()

    def test_second_holder_is_refused(self, guard: SingleInstanceGuard, other_guard: SingleInstanceGuard):
        """A second owner cannot take a held guard."""
        assert guard.acquire()
        assert not other_guard.acquire()
        assert not other_guard.held

    def test_release_lets_others_in(self, guard: SingleInstanceGuard, other_guard: SingleInstanceGuard):
        """After release another owner can take the guard."""
        guard.acquire()
        guard.release()

        assert not guard.held
        assert other_guard.acquire()

    def test_acquire_is_reentrant_for_owner(self, guard: SingleInstanceGuard):
        """Acquiring twice from the owner keeps ownership."""
        assert guard.acquire()
        assert guard.acquire()
        assert guard.held

    def test_release_twice_is_safe(self, guard: SingleInstanceGuard):
        """Releasing an unheld guard is a no-op."""
        guard.release()
        guard.acquire()
        guard.release()
        guard.release()
        assert not guard.held

    def test_owner_pid_recorded(self, guard: SingleInstanceGuard):
        """The holder writes its PID into the lock file."""
        guard.acquire()
        assert guard.owner_pid() == os.getpid()

    def test_owner_pid_missing_file(self, lock_dir: Path):
        """No lock file means no known owner."""
        assert SingleInstanceGuard(lock_dir=lock_dir).owner_pid() is None

    def test_context_manager(self, lock_dir: Path, other_guard: SingleInstanceGuard):
        """The guard is held inside the block and free after it."""
        with SingleInstanceGuard(lock_dir=lock_dir) as g:
            assert g.held
            assert not other_guard.acquire()
        assert not g.held
        assert other_guard.acquire()

    def test_unusable_lock_location_raises(self, tmp_path: Path):
        """Failing to create the lock file is fatal."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")

        with pytest.raises(GuardError) as exc_info:
            SingleInstanceGuard(lock_dir=blocker).acquire()

        assert exc_info.value.path == blocker / f"{GUARD_NAME}.lock"


class TestIsGuardHeld:
    """Tests for is_guard_held()."""

    def test_free_guard_is_taken(self, guard: SingleInstanceGuard, other_guard: SingleInstanceGuard):
        """A free guard reports not held and stays owned by the caller."""
        assert not is_guard_held(guard)
        assert guard.held
        assert is_guard_held(other_guard)

    def test_held_guard_reported(self, guard: SingleInstanceGuard, other_guard: SingleInstanceGuard):
        """A guard owned elsewhere reports held."""
        other_guard.acquire()
        assert is_guard_held(guard)
        assert not guard.held


class TestAcquireWithin:
    """Tests for SingleInstanceGuard.acquire_within()."""

    def test_free_guard_taken_at_once(self, guard: SingleInstanceGuard):
        assert guard.acquire_within(0)
        assert guard.held

    def test_gives_up_after_timeout(self, guard: SingleInstanceGuard, other_guard: SingleInstanceGuard):
        """A guard that stays held is given up on."""
        other_guard.acquire()

        start = time.monotonic()
        assert not guard.acquire_within(0.3, interval=0.05)

        assert time.monotonic() - start >= 0.3
        assert not guard.held

    def test_takes_guard_once_released(self, guard: SingleInstanceGuard, other_guard: SingleInstanceGuard):
        other_guard.acquire()
        timer = threading.Timer(0.2, other_guard.release)
        timer.start()
        try:
            assert guard.acquire_within(5, interval=0.05)
        finally:
            timer.cancel()

        assert guard.held
