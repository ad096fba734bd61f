"""Confluent wire envelope framing.

The envelope prefixes a raw Avro payload with the schema registry identifier
of the schema it was written with:

- [Magic byte 0x00 (1 byte)] [Schema ID (4 bytes, big-endian signed)] [Avro payload]

The payload carries no length prefix. The reader relies on schema-driven
decoding to know where the value ends.

See: https://docs.confluent.io/platform/current/schema-registry/fundamentals/serdes-develop/index.html#wire-format
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from ..exceptions import MagicByteMismatch, MalformedEnvelope

logger = logging.getLogger(__name__)

MAGIC_BYTE = 0x00
HEADER_SIZE = 5

SCHEMA_ID_MIN = -(2**31)
SCHEMA_ID_MAX = 2**31 - 1

_HEADER = struct.Struct(">bi")


@dataclass(frozen=True)
class WireEnvelope:
    """A schema identifier paired with the Avro payload it describes.

    The envelope never carries the schema itself, only its registry identifier.

    Attributes:
        identifier: Registry schema identifier (signed 32-bit)
        payload: Raw Avro binary encoding of the value
    """

    identifier: int
    payload: bytes

    def to_bytes(self) -> bytes:
        """Frame this envelope into its wire representation."""
        return frame_envelope(self.identifier, self.payload)

    def __len__(self) -> int:
        return HEADER_SIZE + len(self.payload)


def frame_envelope(identifier: int, payload: bytes) -> bytes:
    """Frame an Avro payload with the magic byte and schema identifier.

    Args:
        identifier: Schema identifier assigned by the registry
        payload: Raw Avro bytes

    Returns:
        Framed envelope, exactly ``5 + len(payload)`` bytes

    Raises:
        ValueError: If identifier does not fit in a signed 32-bit integer

    Example:
        >>> frame_envelope(5, b"AB")
        b'\\x00\\x00\\x00\\x00\\x05AB'
    """
    if not SCHEMA_ID_MIN <= identifier <= SCHEMA_ID_MAX:
        raise ValueError(
            f"Schema ID must be {SCHEMA_ID_MIN} to {SCHEMA_ID_MAX}, got {identifier}"
        )

    framed = _HEADER.pack(MAGIC_BYTE, identifier) + bytes(payload)
    logger.debug("Framed %d payload bytes with schema id %d", len(payload), identifier)
    return framed


def _check_header(data: bytes) -> None:
    # The magic byte is checked before the length so that any frame starting
    # with a non-zero byte reports a magic mismatch.
    if not data:
        raise MalformedEnvelope(0)
    if data[0] != MAGIC_BYTE:
        raise MagicByteMismatch(data[0])
    if len(data) < HEADER_SIZE:
        raise MalformedEnvelope(len(data))


def unframe_envelope(data: bytes) -> WireEnvelope:
    """Parse a framed envelope into its identifier and payload.

    Args:
        data: Framed bytes, as produced by frame_envelope()

    Returns:
        WireEnvelope with the identifier and the (possibly empty) payload

    Raises:
        MagicByteMismatch: If the first byte is not 0x00
        MalformedEnvelope: If the data is shorter than the 5-byte header

    Example:
        >>> envelope = unframe_envelope(frame_envelope(42, b"Hello"))
        >>> envelope.identifier
        42
        >>> envelope.payload
        b'Hello'
    """
    _check_header(data)
    _, identifier = _HEADER.unpack_from(data, 0)
    return WireEnvelope(identifier=identifier, payload=bytes(data[HEADER_SIZE:]))


def peek_schema_id(data: bytes) -> int:
    """Read the schema identifier without copying the payload.

    Useful for routing or logging framed records before decoding them.

    Raises:
        MagicByteMismatch: If the first byte is not 0x00
        MalformedEnvelope: If the data is shorter than the 5-byte header
    """
    _check_header(data)
    return _HEADER.unpack_from(data, 0)[1]
