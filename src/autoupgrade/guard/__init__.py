"""Cross-process single-instance guard for the updater."""

from autoupgrade.guard.lock import GUARD_NAME, SingleInstanceGuard, is_guard_held

__all__ = [
    "GUARD_NAME",
    "SingleInstanceGuard",
    "is_guard_held",
]
