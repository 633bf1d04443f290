"""Interface between the handoff and the update-detection logic."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from autoupgrade.domain.models import UpgradeConfiguration


@runtime_checkable
class UpdateCapability(Protocol):
    """Anything that can tell whether a newer version is available."""

    def detect_new_version(self) -> bool: ...


CapabilityFactory = Callable[[UpgradeConfiguration], UpdateCapability]
