"""Default update detection against a release feed.

The feed is a JSON document shaped like GitHub's "latest release" endpoint:

    {"tag_name": "v1.4.0", "prerelease": false, ...}

Anything that goes wrong while talking to the feed counts as "no new
version": a flaky network must never trigger an upgrade.
"""

import logging
from typing import Final

import httpx

from autoupgrade.domain.models import UpgradeConfiguration

logger = logging.getLogger(__name__)

USER_AGENT: Final = "autoupgrade/0.1"
FEED_TIMEOUT: Final = 10.0


def parse_version(version: str) -> tuple[int, ...]:
    """Turn ``v1.2.3``-style strings into a comparable tuple.

    Non-numeric parts count as 0 and the result is padded to four parts,
    so ``1.2`` and ``1.2.0.0`` compare equal.
    """
    parts = []
    for part in version.strip().lstrip("vV").split("."):
        digits = "".join(ch for ch in part if ch.isdigit())
        parts.append(int(digits) if digits else 0)

    while len(parts) < 4:
        parts.append(0)

    return tuple(parts)


def compare_versions(current: str, latest: str) -> int:
    """Return -1 if ``latest`` is newer, 0 if equal, 1 if ``current`` is newer."""
    current_tuple = parse_version(current)
    latest_tuple = parse_version(latest)

    if current_tuple == latest_tuple:
        return 0
    return -1 if current_tuple < latest_tuple else 1


class ReleaseFeedCapability:
    """Checks ``config.feed_url`` for a release newer than ``config.current_version``."""

    def __init__(self, config: UpgradeConfiguration, client: httpx.Client | None = None):
        self.config = config
        self._client = client
        self.latest_version: str | None = None

    def _fetch_release(self) -> dict | None:
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github.v3+json",
        }
        client = self._client or httpx.Client(timeout=FEED_TIMEOUT)
        try:
            response = client.get(self.config.feed_url, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Failed to fetch release feed: %s: %s", type(e).__name__, e)
            return None
        finally:
            if self._client is None:
                client.close()

        return data if isinstance(data, dict) else None

    def detect_new_version(self) -> bool:
        if not self.config.feed_url:
            logger.debug("No feed URL configured, skipping version check")
            return False

        release = self._fetch_release()
        if release is None:
            return False

        if release.get("prerelease") and not self.config.allow_prerelease:
            logger.debug("Ignoring prerelease %s", release.get("tag_name"))
            return False

        latest = str(release.get("tag_name") or release.get("version") or "")
        if not latest:
            return False

        self.latest_version = latest.lstrip("vV")
        newer = compare_versions(self.config.current_version, latest) < 0
        logger.debug(
            "Version check: current=%s latest=%s newer=%s",
            self.config.current_version,
            self.latest_version,
            newer,
        )
        return newer


def default_capability_factory(config: UpgradeConfiguration) -> ReleaseFeedCapability:
    """Build the capability used when the caller does not supply one."""
    return ReleaseFeedCapability(config)
