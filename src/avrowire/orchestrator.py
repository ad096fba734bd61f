"""Schema registration and compatibility verification.

This module provides:
- register_schemas(): register a record, or every branch of a union, under
  its full name
- verify_compatibility(): set the desired compatibility level per subject,
  then check the schema against the registry
- SchemaRegistry: a facade bundling a client with the envelope pipelines

A union (tagged ADT) is handled branch by branch, skipping ``null``. Calls
are made strictly in branch order and the first failure aborts the whole
operation; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, TypeVar

from .codec.base import AvroCodec
from .framing.envelope import WireEnvelope, frame_envelope, unframe_envelope
from .registry.client import SchemaRegistryClient
from .registry.compatibility import CompatibilityLevel
from .result import DecodeFailure, Result
from .schema.descriptor import AvroSchema
from .schema.dispatch import resolve_members
from .serde.decoder import decode as _decode
from .serde.encoder import encode as _encode

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SchemaRegistryCompatibilityResult:
    """Outcome of a compatibility check for one schema.

    Attributes:
        schema: Record schema that was checked
        compatible: Whether the registry accepts it under the desired level
    """

    schema: AvroSchema
    compatible: bool


@dataclass(frozen=True)
class SchemaRegistryRegisterResult:
    """Outcome of registering one schema.

    Attributes:
        schema: Record schema that was registered
        identifier: Identifier assigned by the registry
    """

    schema: AvroSchema
    identifier: int


def verify_compatibility(
    schema: AvroSchema,
    client: SchemaRegistryClient,
    desired: CompatibilityLevel = CompatibilityLevel.FULL,
) -> List[SchemaRegistryCompatibilityResult]:
    """Verify a schema against the versions already in the registry.

    For every member (the record itself, or each non-null union branch) the
    subject's compatibility level is first set to ``desired``, then the
    schema is checked. The level is always set before the check of the same
    subject.

    Args:
        schema: Record or union schema
        client: Schema registry client
        desired: Compatibility level to enforce (default FULL)

    Returns:
        One result per member, in member order

    Raises:
        UnsupportedSchemaType: If the schema is neither record nor union
    """
    results = []
    for member in resolve_members(schema):
        client.set_compatibility_level(member.full_name, desired)
        compatible = client.check_compatibility(member)
        if not compatible:
            logger.warning("%s is not %s compatible with the registry", member, desired.value)
        results.append(SchemaRegistryCompatibilityResult(member, compatible))
    return results


def register_schemas(
    schema: AvroSchema, client: SchemaRegistryClient
) -> List[SchemaRegistryRegisterResult]:
    """Register a record schema, or every non-null branch of a union.

    Each schema is registered under its full name (namespace + name).

    Args:
        schema: Record or union schema
        client: Schema registry client

    Returns:
        One result per member, in member order

    Raises:
        UnsupportedSchemaType: If the schema is neither record nor union

    Example:
        >>> from avrowire.registry import MockSchemaRegistry
        >>> union = AvroSchema.parse([
        ...     {"type": "record", "name": "A", "fields": []},
        ...     "null",
        ...     {"type": "record", "name": "B", "fields": []},
        ... ])
        >>> [r.identifier for r in register_schemas(union, MockSchemaRegistry())]
        [1, 2]
    """
    results = []
    for member in resolve_members(schema):
        identifier = client.register_schema(member)
        logger.info("Registered %s with schema id %d", member, identifier)
        results.append(SchemaRegistryRegisterResult(member, identifier))
    return results


class SchemaRegistry:
    """Entry point bundling a registry client with the envelope pipelines.

    Examples:
        ```python
        from avrowire import FastAvroCodec, MockSchemaRegistry, SchemaRegistry

        registry = SchemaRegistry(MockSchemaRegistry())
        codec = FastAvroCodec(user_schema, User)

        registry.register_schemas(codec.schema)
        data = registry.encode(User(id=1, name="Ada"), codec)
        user = registry.decode(data, codec).unwrap()
        ```
    """

    def __init__(self, client: SchemaRegistryClient) -> None:
        self.client = client

    def encode(self, value: T, codec: AvroCodec[T]) -> bytes:
        """Encode ``value`` into a wire envelope. See avrowire.serde.encode()."""
        return _encode(value, codec, self.client)

    def decode(self, data: bytes, codec: AvroCodec[T]) -> Result[T, DecodeFailure]:
        """Decode a wire envelope. See avrowire.serde.decode()."""
        return _decode(data, codec, self.client)

    def verify_compatibility(
        self, schema: AvroSchema, desired: CompatibilityLevel = CompatibilityLevel.FULL
    ) -> List[SchemaRegistryCompatibilityResult]:
        return verify_compatibility(schema, self.client, desired)

    def register_schemas(self, schema: AvroSchema) -> List[SchemaRegistryRegisterResult]:
        return register_schemas(schema, self.client)

    @staticmethod
    def frame(identifier: int, payload: bytes) -> bytes:
        return frame_envelope(identifier, payload)

    @staticmethod
    def unframe(data: bytes) -> WireEnvelope:
        return unframe_envelope(data)
