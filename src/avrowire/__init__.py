"""avrowire: Confluent wire envelope for Avro

A Python library that binds schema registry identifiers to Avro payloads
using the Confluent wire format, and registers or verifies entity schemas
against a schema registry.

Key Features:
- Bit-exact Confluent framing (magic byte + 4-byte schema id + Avro payload)
- Fail-fast encode/decode pipelines with no implicit schema registration
- Per-branch registration and compatibility checks for tagged unions
- fastavro codec for Pydantic models, with schema evolution on decode
- In-memory schema registry for tests

Quick Start:
    >>> from pydantic import BaseModel
    >>> from avrowire import FastAvroCodec, MockSchemaRegistry, decode, encode, register_schemas
    >>>
    >>> class User(BaseModel):
    ...     id: int
    ...     name: str
    >>>
    >>> codec = FastAvroCodec(
    ...     {"type": "record", "name": "User", "namespace": "com.example",
    ...      "fields": [{"name": "id", "type": "long"}, {"name": "name", "type": "string"}]},
    ...     User,
    ... )
    >>> registry = MockSchemaRegistry()
    >>> results = register_schemas(codec.schema, registry)
    >>> data = encode(User(id=1, name="Ada"), codec, registry)
    >>> decode(data, codec, registry).unwrap()
    User(id=1, name='Ada')

Wire format: https://docs.confluent.io/platform/current/schema-registry/fundamentals/serdes-develop/index.html#wire-format
"""

from __future__ import annotations

from .codec import AvroCodec, EncodedValue, FastAvroCodec
from .exceptions import (
    AvrowireError,
    EncodeError,
    EnvelopeError,
    IncompatibleSchemaError,
    MagicByteMismatch,
    MalformedEnvelope,
    RegistryError,
    SchemaError,
    SchemaNotRegistered,
    SubjectNotFoundError,
    UnknownSchemaId,
    UnsupportedSchemaType,
)
from .framing import WireEnvelope, frame_envelope, peek_schema_id, unframe_envelope
from .orchestrator import (
    SchemaRegistry,
    SchemaRegistryCompatibilityResult,
    SchemaRegistryRegisterResult,
    register_schemas,
    verify_compatibility,
)
from .registry import (
    CompatibilityLevel,
    MockRegistryConfig,
    MockSchemaRegistry,
    SchemaRegistryClient,
)
from .result import DecodeFailure, DecodeFailureReason, Err, Ok, Result, sequence
from .schema import AvroSchema, SchemaKind, resolve_members
from .serde import decode, decode_all, encode

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "decode_all",
    "register_schemas",
    "verify_compatibility",
    "SchemaRegistry",
    "SchemaRegistryCompatibilityResult",
    "SchemaRegistryRegisterResult",
    # Framing
    "WireEnvelope",
    "frame_envelope",
    "unframe_envelope",
    "peek_schema_id",
    # Schemas
    "AvroSchema",
    "SchemaKind",
    "resolve_members",
    # Codecs
    "AvroCodec",
    "EncodedValue",
    "FastAvroCodec",
    # Registry
    "SchemaRegistryClient",
    "CompatibilityLevel",
    "MockSchemaRegistry",
    "MockRegistryConfig",
    # Results
    "Result",
    "Ok",
    "Err",
    "sequence",
    "DecodeFailure",
    "DecodeFailureReason",
    # Exceptions
    "AvrowireError",
    "EnvelopeError",
    "MagicByteMismatch",
    "MalformedEnvelope",
    "SchemaError",
    "SchemaNotRegistered",
    "UnknownSchemaId",
    "UnsupportedSchemaType",
    "EncodeError",
    "RegistryError",
    "SubjectNotFoundError",
    "IncompatibleSchemaError",
    # Version
    "__version__",
]
