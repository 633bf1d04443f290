"""autoupgrade - self-update handoff between a managed executable and its updater."""

from autoupgrade.domain import HandoffEnvelope, UpgradeConfiguration, UpgradeStatus
from autoupgrade.handoff import UPDATED_SIGN
from autoupgrade.updater import (
    UpgradeSession,
    run_managed_executable,
    try_resolve_update_service,
    try_upgrade,
)

__version__ = "0.1.0"

__all__ = [
    "HandoffEnvelope",
    "UPDATED_SIGN",
    "UpgradeConfiguration",
    "UpgradeSession",
    "UpgradeStatus",
    "run_managed_executable",
    "try_resolve_update_service",
    "try_upgrade",
]
