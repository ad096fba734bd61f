"""Wire envelope framing for avrowire.

This module provides the 5-byte Confluent header that tags an Avro payload
with its schema registry identifier.
"""

from __future__ import annotations

from .envelope import (
    HEADER_SIZE,
    MAGIC_BYTE,
    SCHEMA_ID_MAX,
    SCHEMA_ID_MIN,
    WireEnvelope,
    frame_envelope,
    peek_schema_id,
    unframe_envelope,
)

__all__ = [
    "MAGIC_BYTE",
    "HEADER_SIZE",
    "SCHEMA_ID_MIN",
    "SCHEMA_ID_MAX",
    "WireEnvelope",
    "frame_envelope",
    "unframe_envelope",
    "peek_schema_id",
]
