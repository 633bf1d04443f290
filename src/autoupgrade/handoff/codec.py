"""Envelope wire format: base64 over the envelope's JSON bytes.

The encoded text is passed as the updater's only command-line argument, so
it has to survive a process boundary untouched by shell quoting. Standard
base64 only uses ``A-Z a-z 0-9 + / =``.
"""

import base64
import binascii
import logging

from autoupgrade.domain.models import HandoffEnvelope
from autoupgrade.errors import EnvelopeDecodeError

logger = logging.getLogger(__name__)


def encode_envelope(envelope: HandoffEnvelope) -> str:
    """Serialize an envelope into printable text."""
    data = envelope.model_dump_json().encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def decode_envelope(payload: str) -> HandoffEnvelope:
    """Rebuild an envelope from the text produced by encode_envelope.

    Raises:
        EnvelopeDecodeError: If the payload is not valid base64 or does not
            describe a HandoffEnvelope.
    """
    try:
        data = base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise EnvelopeDecodeError(f"Payload is not valid base64: {e}") from e

    try:
        envelope = HandoffEnvelope.model_validate_json(data)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        raise EnvelopeDecodeError(f"Payload is not a handoff envelope: {e}") from e

    logger.debug("Decoded envelope for %s (schema %d)", envelope.managed_executable, envelope.schema_version)
    return envelope
