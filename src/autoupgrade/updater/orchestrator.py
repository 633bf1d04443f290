"""Managed-side entry point: decide whether to hand over to the updater.

try_upgrade() runs a fixed sequence of checks, first match wins:

1. Another updater holds the guard       -> UPGRADING
2. This launch carries the relaunch mark -> ENDED
3. The capability sees no newer version  -> NO_NEW_VERSION
4. Otherwise the updater is spawned      -> STARTED

On STARTED the caller must exit so the updater can replace its files.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from autoupgrade.capability import CapabilityFactory, default_capability_factory
from autoupgrade.domain.enums import UpgradeStatus
from autoupgrade.domain.models import HandoffEnvelope, UpgradeConfiguration
from autoupgrade.errors import UpdaterNotFoundError
from autoupgrade.guard import SingleInstanceGuard, is_guard_held
from autoupgrade.handoff import encode_envelope, is_post_update_launch
from autoupgrade.updater.process import (
    base_directory,
    build_command,
    current_arguments,
    current_executable,
    spawn_detached,
)

logger = logging.getLogger(__name__)


def resolve_target_folder(config: UpgradeConfiguration, managed_executable: str) -> None:
    """Fill in or normalize ``config.target_folder`` in place."""
    if not config.target_folder:
        config.target_folder = base_directory(managed_executable)
    else:
        config.target_folder = str(Path(config.target_folder).resolve())


def try_upgrade(
    config: UpgradeConfiguration,
    updater_executable: str | Path,
    *,
    capability_factory: CapabilityFactory | None = None,
    args: Sequence[str] | None = None,
    guard: SingleInstanceGuard | None = None,
) -> UpgradeStatus:
    """Try to hand control over to the updater.

    Args:
        config: Upgrade settings. ``target_folder`` is resolved in place when
            an upgrade is started.
        updater_executable: Path to the updater program (binary or script).
        capability_factory: Builds the update-detection collaborator from
            ``config``. Defaults to the release-feed capability.
        args: This process's arguments without the program name. Defaults to
            ``sys.argv[1:]``.
        guard: Guard to query. Defaults to the product-wide guard. It is
            released again right after the query unless the caller already
            held it.

    Returns:
        The UpgradeStatus. Only STARTED spawns a process, and on STARTED the
        caller is expected to exit.

    Raises:
        UpdaterNotFoundError: If ``updater_executable`` is not an existing file.
    """
    updater_path = Path(updater_executable)
    if not updater_path.is_file():
        raise UpdaterNotFoundError(updater_path)

    guard = guard or SingleInstanceGuard()
    owned_by_caller = guard.held
    if is_guard_held(guard):
        logger.info("An updater is already running")
        return UpgradeStatus.UPGRADING
    # Only a query: keeping the guard would turn away a starting updater
    if not owned_by_caller:
        guard.release()

    launch_args = list(current_arguments() if args is None else args)
    if is_post_update_launch(launch_args):
        logger.info("Relaunched after update")
        return UpgradeStatus.ENDED

    factory = capability_factory or default_capability_factory
    if not factory(config).detect_new_version():
        logger.debug("No new version available")
        return UpgradeStatus.NO_NEW_VERSION

    managed_executable, interpreter = current_executable()
    resolve_target_folder(config, managed_executable)

    envelope = HandoffEnvelope.capture(
        config,
        managed_executable=managed_executable,
        arguments=launch_args,
        interpreter=interpreter,
    )
    cmd = build_command(str(updater_path.resolve()), [encode_envelope(envelope)])
    spawn_detached(cmd)

    logger.info("Updater started for %s", config.target_folder)
    return UpgradeStatus.STARTED
