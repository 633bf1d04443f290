"""Handoff between the managed executable and the updater.

Managed side:
- try_upgrade(): check guard, relaunch marker and version, then spawn the updater

Updater side:
- try_resolve_update_service(): recover the envelope and take the guard
- run_managed_executable(): release the guard and restart the managed executable
"""

from autoupgrade.updater.bootstrap import UpgradeSession, try_resolve_update_service
from autoupgrade.updater.orchestrator import resolve_target_folder, try_upgrade
from autoupgrade.updater.relaunch import run_managed_executable

__all__ = [
    "UpgradeSession",
    "resolve_target_folder",
    "run_managed_executable",
    "try_resolve_update_service",
    "try_upgrade",
]
