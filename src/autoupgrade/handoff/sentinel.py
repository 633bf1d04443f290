"""Marker appended to the managed executable's arguments after an update."""

from collections.abc import Sequence
from typing import Final

UPDATED_SIGN: Final = "UPDATEDSIGN"


def is_post_update_launch(args: Sequence[str]) -> bool:
    """Check whether this launch is the relaunch performed by the updater.

    Only the last argument counts; the token anywhere else is an ordinary
    application argument.
    """
    return bool(args) and args[-1] == UPDATED_SIGN


def with_updated_sign(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the relaunch marker appended."""
    return [*args, UPDATED_SIGN]
