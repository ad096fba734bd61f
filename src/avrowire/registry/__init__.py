"""Schema registry abstraction layer.

This module provides the registry client contract avrowire talks to, plus
an in-memory implementation for testing without a running registry.

## Available Clients

### MockSchemaRegistry
In-memory registry with Confluent-like semantics:
- Global identifiers, per-subject version lists
- Per-subject compatibility levels with a configurable default
- Optional enforcement of compatibility on registration
- Recorded call log for asserting call order in tests

### HTTP Clients
Not provided. Implement SchemaRegistryClient on top of your HTTP library
of choice to talk to Confluent Schema Registry or Apicurio.

## Quick Start

```python
from avrowire.registry import CompatibilityLevel, MockSchemaRegistry
from avrowire.schema import AvroSchema

schema = AvroSchema.parse({"type": "record", "name": "Ping", "fields": []})

registry = MockSchemaRegistry()
identifier = registry.register_schema(schema)
registry.set_compatibility_level("Ping", CompatibilityLevel.FULL)
assert registry.check_compatibility(schema)
```
"""

from __future__ import annotations

from .client import SchemaRegistryClient
from .compatibility import CompatibilityLevel
from .config import MockRegistryConfig
from .mock import MockSchemaRegistry
from .rules import can_read, is_compatible

__all__ = [
    "SchemaRegistryClient",
    "CompatibilityLevel",
    "MockSchemaRegistry",
    "MockRegistryConfig",
    "can_read",
    "is_compatible",
]
