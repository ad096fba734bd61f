#!/usr/bin/env python3
"""Basic usage example for avrowire.

This example demonstrates:
1. Defining a tagged union of records with Pydantic models
2. Verifying and registering every branch with a schema registry
3. Encoding values into Confluent wire envelopes
4. Decoding envelopes back into Pydantic models
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from avrowire import (
    FastAvroCodec,
    MockSchemaRegistry,
    SchemaRegistry,
    peek_schema_id,
)

NAMESPACE = "com.example.booking"

BOOKING_SCHEMA = [
    {
        "type": "record",
        "name": "NotStarted",
        "namespace": NAMESPACE,
        "fields": [{"name": "step", "type": "int"}],
    },
    "null",
    {
        "type": "record",
        "name": "DateSelected",
        "namespace": NAMESPACE,
        "fields": [
            {"name": "step", "type": "int"},
            {"name": "date", "type": "string"},
        ],
    },
    {
        "type": "record",
        "name": "Cancelled",
        "namespace": NAMESPACE,
        "fields": [{"name": "step", "type": "int"}],
    },
]


class NotStarted(BaseModel):
    """Booking created, nothing chosen yet."""

    step: int


class DateSelected(BaseModel):
    """Customer picked a date."""

    step: int
    date: str


class Cancelled(BaseModel):
    """Booking cancelled."""

    step: int


def main() -> None:
    """Run the basic usage example."""
    logging.basicConfig(level=logging.INFO, format="   [%(name)s] %(message)s")

    print("=" * 60)
    print("avrowire Basic Usage Example")
    print("=" * 60)
    print()

    registry = SchemaRegistry(MockSchemaRegistry())
    codec = FastAvroCodec(
        BOOKING_SCHEMA,
        {
            f"{NAMESPACE}.NotStarted": NotStarted,
            f"{NAMESPACE}.DateSelected": DateSelected,
            f"{NAMESPACE}.Cancelled": Cancelled,
        },
    )

    # Verify the schema before registering it
    print("1. Verifying compatibility (FULL)...")
    for check in registry.verify_compatibility(codec.schema):
        print(f"   {check.schema.full_name}: compatible={check.compatible}")
    print()

    print("2. Registering schemas...")
    for result in registry.register_schemas(codec.schema):
        print(f"   {result.schema.full_name} -> id {result.identifier}")
    print()

    print("3. Encoding booking events...")
    events = [NotStarted(step=0), DateSelected(step=1, date="2024-05-01"), Cancelled(step=2)]
    stream = [registry.encode(event, codec) for event in events]
    for event, data in zip(events, stream):
        print(f"   {type(event).__name__}: id={peek_schema_id(data)} hex={data.hex()}")
    print()

    print("4. Decoding booking events...")
    for data in stream:
        decoded = registry.decode(data, codec).unwrap()
        print(f"   {decoded!r}")
    print()

    print("5. Verifying round-trip...")
    decoded_events = [registry.decode(data, codec).unwrap() for data in stream]
    if decoded_events == events:
        print("   ✓ Round-trip successful!")
    else:
        print("   ✗ Round-trip failed!")
    print()


if __name__ == "__main__":
    main()
