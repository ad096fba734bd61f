"""Configuration for the in-memory schema registry."""

from __future__ import annotations

from dataclasses import dataclass

from ..framing.envelope import SCHEMA_ID_MAX, SCHEMA_ID_MIN
from .compatibility import CompatibilityLevel


@dataclass
class MockRegistryConfig:
    """Configuration for MockSchemaRegistry.

    Attributes:
        default_compatibility: Level used for subjects without an explicit
            level (default BACKWARD, matching Confluent Schema Registry).
        first_id: Identifier handed out for the first registered schema
            (default 1). Identifiers increase by one per new schema.
        enforce_compatibility: If True, register_schema() rejects a new
            version that violates the subject's compatibility level with
            IncompatibleSchemaError, like a real registry answering 409.

    Examples:
        ```python
        from avrowire.registry import CompatibilityLevel, MockRegistryConfig, MockSchemaRegistry

        config = MockRegistryConfig(
            default_compatibility=CompatibilityLevel.FULL,
            first_id=100,
            enforce_compatibility=True,
        )
        registry = MockSchemaRegistry(config)
        ```
    """

    default_compatibility: CompatibilityLevel = CompatibilityLevel.BACKWARD
    first_id: int = 1
    enforce_compatibility: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.default_compatibility, CompatibilityLevel):
            self.default_compatibility = CompatibilityLevel(self.default_compatibility)

        if not SCHEMA_ID_MIN <= self.first_id <= SCHEMA_ID_MAX:
            raise ValueError(
                f"first_id must be {SCHEMA_ID_MIN} to {SCHEMA_ID_MAX}, got {self.first_id}"
            )
