"""Exceptions raised by the upgrade handoff."""

from pathlib import Path


class AutoUpgradeError(Exception):
    """Base class for all autoupgrade errors."""


class UpdaterNotFoundError(AutoUpgradeError, FileNotFoundError):
    """Raised when the updater executable handed to try_upgrade does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Can't find the updater executable: {path}")


class UpgradeContractError(AutoUpgradeError):
    """Raised when the updater-side calls are made out of order."""


class GuardError(AutoUpgradeError):
    """Raised when the single-instance lock file cannot be created."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open updater guard {path}: {reason}")


class EnvelopeDecodeError(AutoUpgradeError):
    """Raised when a handoff payload cannot be decoded into an envelope."""
