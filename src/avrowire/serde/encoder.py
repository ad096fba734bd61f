"""Registry-framed Avro encoder.

This module provides the encode() function that turns a value into a
Confluent wire envelope: the codec writes the raw Avro bytes, the registry
supplies the identifier of the schema used, and the envelope ties the two
together.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from ..codec.base import AvroCodec
from ..exceptions import SchemaNotRegistered
from ..framing.envelope import frame_envelope
from ..registry.client import SchemaRegistryClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def encode(value: T, codec: AvroCodec[T], client: SchemaRegistryClient) -> bytes:
    """Encode a value as a registry-framed Avro payload.

    The schema used by the codec must already be registered. Encoding never
    registers schemas and never mutates the registry.

    Args:
        value: Value to encode
        codec: Avro codec for the value's type
        client: Schema registry client used to look up the schema identifier

    Returns:
        ``0x00`` + 4-byte schema identifier + raw Avro payload

    Raises:
        EncodeError: If the codec cannot encode the value
        SchemaNotRegistered: If the registry has no identifier for the schema

    Examples:
        ```python
        from avrowire import FastAvroCodec, MockSchemaRegistry, decode, encode, register_schemas

        registry = MockSchemaRegistry()
        codec = FastAvroCodec(user_schema, User)
        register_schemas(codec.schema, registry)

        data = encode(User(id=1, name="Ada"), codec, registry)
        user = decode(data, codec, registry).unwrap()
        ```
    """
    encoded = codec.encode(value)

    identifier = client.get_id_by_schema(encoded.schema)
    if identifier is None:
        raise SchemaNotRegistered(encoded.schema.full_name)

    logger.debug("Encoding %s with schema id %d", encoded.schema, identifier)
    return frame_envelope(identifier, encoded.payload)
