"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from avrowire import AvroSchema, MockSchemaRegistry


@pytest.fixture
def user_schema() -> AvroSchema:
    """Version 1 of the com.example.User record."""
    return AvroSchema.parse(
        {
            "type": "record",
            "name": "User",
            "namespace": "com.example",
            "fields": [
                {"name": "id", "type": "long"},
                {"name": "name", "type": "string"},
            ],
        }
    )


@pytest.fixture
def user_v2_schema() -> AvroSchema:
    """Version 2 of the com.example.User record (adds an optional email)."""
    return AvroSchema.parse(
        {
            "type": "record",
            "name": "User",
            "namespace": "com.example",
            "fields": [
                {"name": "id", "type": "long"},
                {"name": "name", "type": "string"},
                {"name": "email", "type": ["null", "string"], "default": None},
            ],
        }
    )


@pytest.fixture
def booking_schema() -> AvroSchema:
    """Tagged union [NotStarted, null, DateSelected, Cancelled]."""
    return AvroSchema.parse(
        [
            {
                "type": "record",
                "name": "NotStarted",
                "namespace": "com.example.booking",
                "fields": [{"name": "step", "type": "int"}],
            },
            "null",
            {
                "type": "record",
                "name": "DateSelected",
                "namespace": "com.example.booking",
                "fields": [
                    {"name": "step", "type": "int"},
                    {"name": "date", "type": "string"},
                ],
            },
            {
                "type": "record",
                "name": "Cancelled",
                "namespace": "com.example.booking",
                "fields": [{"name": "step", "type": "int"}],
            },
        ]
    )


@pytest.fixture
def registry() -> MockSchemaRegistry:
    """Empty in-memory schema registry."""
    return MockSchemaRegistry()


@pytest.fixture
def sample_payload() -> bytes:
    """Sample raw Avro payload for framing tests."""
    return b"\x02\x06Ada"
