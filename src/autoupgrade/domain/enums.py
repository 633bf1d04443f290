"""Enumerations for domain models."""

from enum import Enum


class UpgradeStatus(str, Enum):
    """Outcome of an upgrade attempt, as seen by the managed executable."""

    UPGRADING = "upgrading"  # An updater for this product is already active
    ENDED = "ended"  # This launch is the relaunch after a finished update
    NO_NEW_VERSION = "no_new_version"
    STARTED = "started"  # Updater spawned, caller must exit

    @property
    def must_exit(self) -> bool:
        """Whether the managed executable has to terminate now."""
        return self is UpgradeStatus.STARTED
