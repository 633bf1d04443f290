"""Update-detection collaborators consulted before an upgrade."""

from autoupgrade.capability.base import CapabilityFactory, UpdateCapability
from autoupgrade.capability.release_feed import (
    ReleaseFeedCapability,
    compare_versions,
    default_capability_factory,
    parse_version,
)

__all__ = [
    "CapabilityFactory",
    "UpdateCapability",
    "ReleaseFeedCapability",
    "default_capability_factory",
    "compare_versions",
    "parse_version",
]
