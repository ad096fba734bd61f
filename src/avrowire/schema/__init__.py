"""Avro schema descriptors and kind dispatch for avrowire."""

from __future__ import annotations

from .descriptor import PRIMITIVE_TYPES, AvroField, AvroSchema, SchemaKind
from .dispatch import resolve_members

__all__ = [
    "AvroSchema",
    "AvroField",
    "SchemaKind",
    "PRIMITIVE_TYPES",
    "resolve_members",
]
