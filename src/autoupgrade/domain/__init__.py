"""Domain models for the upgrade handoff."""

from autoupgrade.domain.enums import UpgradeStatus
from autoupgrade.domain.models import CapturedConfiguration, HandoffEnvelope, UpgradeConfiguration

__all__ = [
    "UpgradeStatus",
    "UpgradeConfiguration",
    "CapturedConfiguration",
    "HandoffEnvelope",
]
