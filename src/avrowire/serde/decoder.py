"""Registry-framed Avro decoder.

This module provides the decode() function that turns a Confluent wire
envelope back into a value.

Failures come in two classes:

- Protocol and registry integrity failures (bad magic byte, truncated
  header, unknown schema identifier) are raised.
- Value-level failures (corrupt payload, missing field, type mismatch) are
  returned as ``Err(DecodeFailure)`` so callers can branch on them, for
  example to route the record to a dead-letter topic.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, TypeVar

from ..codec.base import AvroCodec
from ..exceptions import UnknownSchemaId
from ..framing.envelope import unframe_envelope
from ..registry.client import SchemaRegistryClient
from ..result import DecodeFailure, Result, sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")


def decode(
    data: bytes, codec: AvroCodec[T], client: SchemaRegistryClient
) -> Result[T, DecodeFailure]:
    """Decode a registry-framed Avro payload.

    The writer schema is fetched from the registry by the identifier in the
    envelope; the codec reconciles it with its own reader schema.

    Args:
        data: Framed bytes, as produced by encode()
        codec: Avro codec for the target type
        client: Schema registry client used to fetch the writer schema

    Returns:
        Ok(value) on success, Err(DecodeFailure) if the payload cannot be
        decoded into the target type

    Raises:
        MagicByteMismatch: If the first byte is not 0x00
        MalformedEnvelope: If the data is shorter than the 5-byte header
        UnknownSchemaId: If the registry has no schema for the identifier

    Examples:
        ```python
        result = decode(data, codec, registry)
        if result.is_ok():
            handle(result.unwrap())
        else:
            dead_letter(data, result.error)
        ```
    """
    envelope = unframe_envelope(data)

    writer_schema = client.get_schema_by_id(envelope.identifier)
    if writer_schema is None:
        raise UnknownSchemaId(envelope.identifier)

    result = codec.decode(envelope.payload, writer_schema)
    if result.is_err():
        logger.warning(
            "Failed to decode payload with schema id %d (%s): %s",
            envelope.identifier,
            writer_schema,
            result.error,
        )
    return result


def decode_all(
    records: Iterable[bytes], codec: AvroCodec[T], client: SchemaRegistryClient
) -> Result[List[T], DecodeFailure]:
    """Decode a batch of envelopes, stopping at the first value-level failure.

    Returns:
        Ok(values in input order), or the first Err(DecodeFailure)

    Raises:
        Same protocol and registry errors as decode()
    """
    return sequence(decode(data, codec, client) for data in records)
