"""Exception hierarchy for avrowire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from AvrowireError for easy catching of any avrowire-specific error.

Value-level Avro decode problems are NOT exceptions: they are returned as
DecodeFailure values (see avrowire.result).
"""

from __future__ import annotations

from typing import Optional


class AvrowireError(Exception):
    """Base exception for all avrowire errors."""

    pass


class EnvelopeError(AvrowireError):
    """Raised when a wire envelope cannot be parsed.

    Examples:
        - First byte is not the magic byte
        - Input shorter than the 5-byte header
    """

    pass


class MagicByteMismatch(EnvelopeError):
    """Raised when the first byte of an envelope is not 0x00."""

    def __init__(self, first_byte: int) -> None:
        self.first_byte = first_byte
        super().__init__(f"First byte was not the magic byte (0x00), got 0x{first_byte:02x}")


class MalformedEnvelope(EnvelopeError):
    """Raised when an envelope is shorter than the 5-byte header."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Envelope too short: need at least 5 bytes, got {length} bytes")


class SchemaError(AvrowireError):
    """Raised when an Avro schema definition is invalid.

    Examples:
        - Schema text is not valid JSON
        - Named type without a name
        - Union nested directly inside a union
    """

    pass


class SchemaNotRegistered(AvrowireError):
    """Raised when encoding with a schema the registry has no identifier for.

    Encoding never registers schemas implicitly; register them up front with
    register_schemas().
    """

    def __init__(self, full_name: Optional[str]) -> None:
        self.full_name = full_name
        super().__init__(f"There was no schema registered for {full_name}")


class UnknownSchemaId(AvrowireError):
    """Raised when an envelope references an identifier absent from the registry."""

    def __init__(self, identifier: int) -> None:
        self.identifier = identifier
        super().__init__(f"There was no schema in the registry for identifier {identifier}")


class UnsupportedSchemaType(AvrowireError):
    """Raised when registering or verifying a schema that has no subject name.

    Only records and unions of records can be registered; primitives, arrays,
    maps, enums and fixed types are rejected.
    """

    def __init__(self, schema_type: str) -> None:
        self.schema_type = schema_type
        super().__init__(
            f"Cannot register or verify schema of type {schema_type!r}: it has no full name"
        )


class EncodeError(AvrowireError):
    """Raised when a value cannot be encoded to Avro.

    Examples:
        - Value class has no matching branch in a union schema
        - Field value does not match the Avro field type
    """

    pass


class RegistryError(AvrowireError):
    """Base exception for errors reported by a schema registry client."""

    pass


class SubjectNotFoundError(RegistryError):
    """Raised when a registry operation references an unknown subject."""

    def __init__(self, subject: str) -> None:
        self.subject = subject
        super().__init__(f"Subject {subject!r} not found")


class IncompatibleSchemaError(RegistryError):
    """Raised when a new schema version violates the subject's compatibility level."""

    def __init__(self, subject: str, level: str) -> None:
        self.subject = subject
        self.level = level
        super().__init__(
            f"Schema being registered is incompatible with subject {subject!r} "
            f"under compatibility level {level}"
        )
