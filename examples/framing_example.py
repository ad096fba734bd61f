#!/usr/bin/env python3
"""Wire envelope and failure handling example for avrowire.

This example demonstrates:
1. The Confluent wire envelope layout
2. Reading the schema identifier without decoding
3. Protocol errors (raised) versus value errors (returned)
4. Routing undecodable records to a dead-letter list
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from avrowire import (
    AvrowireError,
    FastAvroCodec,
    MockSchemaRegistry,
    decode,
    encode,
    frame_envelope,
    peek_schema_id,
    register_schemas,
    unframe_envelope,
)

USER_SCHEMA = {
    "type": "record",
    "name": "User",
    "namespace": "com.example",
    "fields": [
        {"name": "id", "type": "long"},
        {"name": "name", "type": "string"},
    ],
}


class User(BaseModel):
    """Registered user."""

    id: int
    name: str


def main() -> None:
    """Run the framing example."""
    print("=" * 60)
    print("avrowire Wire Envelope Example")
    print("=" * 60)
    print()

    registry = MockSchemaRegistry()
    codec = FastAvroCodec(USER_SCHEMA, User)
    register_schemas(codec.schema, registry)

    # Envelope layout
    print("1. Envelope layout...")
    data = encode(User(id=1, name="Ada"), codec, registry)
    envelope = unframe_envelope(data)
    print(f"   Envelope:    {data.hex()}")
    print(f"   Magic byte:  {data[0]:#04x}")
    print(f"   Schema id:   {envelope.identifier}")
    print(f"   Avro bytes:  {envelope.payload.hex()} ({len(envelope.payload)} bytes)")
    print()

    print("2. Peeking at the schema id...")
    print(f"   peek_schema_id -> {peek_schema_id(data)}")
    print()

    # A small batch with one good record, one corrupt payload, one corrupt header
    print("3. Consuming a batch with bad records...")
    batch = [
        data,
        frame_envelope(envelope.identifier, b"\x02"),
        b"\x01" + data[1:],
    ]
    dead_letters: List[bytes] = []

    for i, record in enumerate(batch, 1):
        try:
            result = decode(record, codec, registry)
        except AvrowireError as e:
            print(f"   Record {i}: ✗ protocol error: {e}")
            dead_letters.append(record)
            continue

        if result.is_ok():
            print(f"   Record {i}: ✓ {result.unwrap()!r}")
        else:
            print(f"   Record {i}: ✗ {result.error}")
            dead_letters.append(record)
    print()

    print(f"4. Dead-lettered {len(dead_letters)} of {len(batch)} records")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
