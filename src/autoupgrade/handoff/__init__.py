"""Wire format and relaunch marker shared by both executables."""

from autoupgrade.handoff.codec import decode_envelope, encode_envelope
from autoupgrade.handoff.sentinel import UPDATED_SIGN, is_post_update_launch, with_updated_sign

__all__ = [
    "UPDATED_SIGN",
    "decode_envelope",
    "encode_envelope",
    "is_post_update_launch",
    "with_updated_sign",
]
