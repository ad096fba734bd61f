"""Registry-framed Avro serialization for avrowire.

This module provides encoding and decoding between values and Confluent
wire envelopes.
"""

from __future__ import annotations

from .decoder import decode, decode_all
from .encoder import encode

__all__ = [
    "encode",
    "decode",
    "decode_all",
]
