"""Avro schema resolution rules used for compatibility checks.

A reader schema can read data written with a writer schema when Avro schema
resolution succeeds:

- Identical primitives, or a permitted promotion (int -> long/float/double,
  long -> float/double, float -> double, string <-> bytes)
- Records with the same full name (or a reader alias); every reader field
  is either present in the writer with a readable type or has a default
- Enums with the same name whose reader symbols cover the writer symbols,
  unless the reader declares a fallback default
- Fixed types with the same name and size
- Arrays and maps whose items / values resolve
- Writer unions: every branch must resolve; reader unions: some branch must

See: https://avro.apache.org/docs/1.11.1/specification/#schema-resolution
"""

from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple

from ..schema.descriptor import AvroField, AvroSchema
from .compatibility import CompatibilityLevel

PROMOTIONS = {
    "int": {"long", "float", "double"},
    "long": {"float", "double"},
    "float": {"double"},
    "string": {"bytes"},
    "bytes": {"string"},
}


def can_read(reader: AvroSchema, writer: AvroSchema) -> bool:
    """Return True if data written with ``writer`` can be read with ``reader``."""
    return _can_read(reader, writer, set())


def _names_match(reader: AvroSchema, writer: AvroSchema) -> bool:
    return reader.full_name == writer.full_name or writer.full_name in reader.aliases


def _can_read(reader: AvroSchema, writer: AvroSchema, seen: Set[Tuple[str, str]]) -> bool:
    if writer.type == "union":
        return all(_can_read(reader, branch, seen) for branch in writer.members)

    if reader.type == "union":
        return any(_can_read(branch, writer, seen) for branch in reader.members)

    if reader.type != writer.type:
        return reader.type in PROMOTIONS.get(writer.type, ())

    if reader.type in ("record", "error"):
        if not _names_match(reader, writer):
            return False
        key = (reader.canonical, writer.canonical)
        if key in seen:
            # Recursive reference already being checked
            return True
        seen.add(key)
        return all(_field_readable(field, writer, seen) for field in reader.fields)

    if reader.type == "enum":
        if not _names_match(reader, writer):
            return False
        return reader.enum_default is not None or set(writer.symbols) <= set(reader.symbols)

    if reader.type == "fixed":
        return _names_match(reader, writer) and reader.size == writer.size

    if reader.type == "array":
        return _can_read(reader.items, writer.items, seen)

    if reader.type == "map":
        return _can_read(reader.values, writer.values, seen)

    # Same primitive type
    return True


def _writer_field(field: AvroField, writer: AvroSchema) -> Optional[AvroField]:
    for name in (field.name, *field.aliases):
        match = writer.get_field(name)
        if match is not None:
            return match
    return None


def _field_readable(field: AvroField, writer: AvroSchema, seen: Set[Tuple[str, str]]) -> bool:
    writer_field = _writer_field(field, writer)
    if writer_field is None:
        return field.has_default
    return _can_read(field.schema, writer_field.schema, seen)


def is_compatible(
    new: AvroSchema, existing: Iterable[AvroSchema], level: CompatibilityLevel
) -> bool:
    """Check ``new`` against ``existing`` versions (oldest first) under ``level``.

    Non-transitive levels only compare against the latest version. A subject
    without versions accepts any schema.

    Example:
        >>> v1 = AvroSchema.parse({"type": "record", "name": "U", "fields": [
        ...     {"name": "id", "type": "int"}]})
        >>> v2 = AvroSchema.parse({"type": "record", "name": "U", "fields": [
        ...     {"name": "id", "type": "long"}]})
        >>> is_compatible(v2, [v1], CompatibilityLevel.BACKWARD)
        True
        >>> is_compatible(v2, [v1], CompatibilityLevel.FORWARD)
        False
    """
    if level is CompatibilityLevel.NONE:
        return True

    versions = list(existing)
    if not level.is_transitive:
        versions = versions[-1:]

    for old in versions:
        if level.checks_backward and not can_read(new, old):
            return False
        if level.checks_forward and not can_read(old, new):
            return False
    return True
