"""Abstract interface for Avro value codecs.

A codec knows how to turn values of one Python type into raw Avro bytes and
back. It is passed explicitly to the envelope pipelines; nothing is looked
up implicitly by type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..result import DecodeFailure, Result
from ..schema.descriptor import AvroSchema

T = TypeVar("T")


@dataclass(frozen=True)
class EncodedValue:
    """Raw Avro bytes together with the schema they were written with.

    For a union (tagged ADT) codec, ``schema`` is the branch matching the
    value, not the union: that branch is what gets registered and looked up.

    Attributes:
        schema: Schema actually used to write ``payload``
        payload: Raw Avro binary encoding, without any framing
    """

    schema: AvroSchema
    payload: bytes


class AvroCodec(ABC, Generic[T]):
    """Abstract Avro encoder/decoder for values of type ``T``."""

    @property
    @abstractmethod
    def schema(self) -> AvroSchema:
        """Reader schema of this codec (a record or a union of records)."""

    @abstractmethod
    def encode(self, value: T) -> EncodedValue:
        """Encode ``value`` to raw Avro bytes.

        Raises:
            EncodeError: If the value cannot be written with the schema
        """

    @abstractmethod
    def decode(self, payload: bytes, writer_schema: AvroSchema) -> Result[T, DecodeFailure]:
        """Decode raw Avro bytes written with ``writer_schema``.

        Schema evolution between ``writer_schema`` and the codec's reader
        schema is the codec's responsibility.

        Returns:
            Ok(value), or Err(DecodeFailure) for malformed or mismatching data
        """
