"""Restart the managed executable once the updater is done."""

import logging

from autoupgrade.errors import UpgradeContractError
from autoupgrade.handoff import with_updated_sign
from autoupgrade.updater.bootstrap import UpgradeSession
from autoupgrade.updater.process import build_command, spawn_detached

logger = logging.getLogger(__name__)


def run_managed_executable(session: UpgradeSession | None) -> None:
    """Release the guard and start the managed executable again.

    The managed executable gets its original arguments plus the relaunch
    marker, so its next try_upgrade() returns ENDED.

    Raises:
        UpgradeContractError: If ``session`` is None or was already used.
    """
    if session is None:
        raise UpgradeContractError("run_managed_executable() requires a resolved UpgradeSession")
    if session.closed:
        raise UpgradeContractError("The managed executable was already relaunched for this session")

    envelope = session.envelope
    cmd = build_command(
        envelope.managed_executable,
        with_updated_sign(envelope.argument_list),
        envelope.interpreter,
    )

    # Must be free before the relaunched process runs its own upgrade check
    session.guard.release()
    session.closed = True

    spawn_detached(cmd)
    logger.info("Relaunched %s", envelope.managed_executable)
