"""Updater-side entry point: recover the handoff envelope.

The updater is started with a single argument, the encoded envelope. A
missing or garbled argument is expected (someone double-clicked the
updater) and results in None instead of an exception.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

from autoupgrade.capability import CapabilityFactory, UpdateCapability, default_capability_factory
from autoupgrade.domain.models import HandoffEnvelope, UpgradeConfiguration
from autoupgrade.errors import EnvelopeDecodeError
from autoupgrade.guard import SingleInstanceGuard
from autoupgrade.handoff import decode_envelope
from autoupgrade.updater.process import current_arguments

logger = logging.getLogger(__name__)

# Covers a managed instance briefly querying the guard while the updater starts
GUARD_WAIT: Final = 5.0


@dataclass
class UpgradeSession:
    """State of one upgrade cycle inside the updater process.

    Returned by try_resolve_update_service() and passed to
    run_managed_executable() once the files are replaced.
    """

    envelope: HandoffEnvelope
    service: UpdateCapability
    guard: SingleInstanceGuard
    closed: bool = field(default=False)

    @property
    def config(self) -> UpgradeConfiguration:
        return self.envelope.config

    @property
    def target_folder(self) -> str:
        return self.envelope.config.target_folder


def try_resolve_update_service(
    args: Sequence[str] | None = None,
    *,
    capability_factory: CapabilityFactory | None = None,
    guard: SingleInstanceGuard | None = None,
    guard_wait: float = GUARD_WAIT,
) -> UpgradeSession | None:
    """Rebuild the upgrade context handed over by the managed executable.

    Args:
        args: Updater arguments without the program name. Defaults to
            ``sys.argv[1:]``.
        capability_factory: Builds the update service from the recovered
            configuration. Defaults to the release-feed capability.
        guard: Guard to take for the lifetime of the updater. Defaults to the
            product-wide guard.
        guard_wait: Seconds to keep retrying the guard before concluding
            that another updater owns it.

    Returns:
        An UpgradeSession owning the guard, or None when there is nothing to
        do (no argument, undecodable argument, or another updater running).

    Raises:
        GuardError: If the guard's lock file cannot be created.
    """
    run_args = list(current_arguments() if args is None else args)
    if not run_args:
        logger.warning("Updater started without a handoff argument")
        return None

    try:
        envelope = decode_envelope(run_args[0])
    except EnvelopeDecodeError as e:
        logger.warning("Ignoring invalid handoff argument: %s", e)
        return None

    guard = guard or SingleInstanceGuard()
    if not guard.acquire_within(guard_wait):
        logger.warning("Another updater is already running")
        return None

    factory = capability_factory or default_capability_factory
    try:
        service = factory(envelope.config)
    except Exception:
        guard.release()
        raise

    logger.info("Resolved upgrade for %s", envelope.managed_executable)
    return UpgradeSession(envelope=envelope, service=service, guard=guard)
