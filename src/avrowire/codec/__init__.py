"""Avro value codecs for avrowire.

This module provides the codec contract used by the envelope pipelines and
a fastavro implementation for Pydantic models.
"""

from __future__ import annotations

from .avro import FastAvroCodec
from .base import AvroCodec, EncodedValue

__all__ = [
    "AvroCodec",
    "EncodedValue",
    "FastAvroCodec",
]
