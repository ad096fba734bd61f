"""Abstract interface for schema registry clients.

This module provides the contract the envelope pipelines and the
registration orchestrator talk to. The transport behind it is not part of
avrowire:

- MockSchemaRegistry: In-memory implementation (tests, local development)
- HTTP clients for Confluent or Apicurio: implemented by the application

Every method is a remote call in a real deployment. Implementations raise
their own transport errors; avrowire propagates them unchanged and never
retries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..schema.descriptor import AvroSchema
from .compatibility import CompatibilityLevel


class SchemaRegistryClient(ABC):
    """Abstract interface for schema registry clients.

    The subject of a schema is its full name (namespace + name).

    Examples:
        ```python
        from avrowire.registry import MockSchemaRegistry

        client = MockSchemaRegistry()
        identifier = client.register_schema(user_schema)
        assert client.get_schema_by_id(identifier) == user_schema
        assert client.get_id_by_schema(user_schema) == identifier
        ```
    """

    @abstractmethod
    def get_schema_by_id(self, identifier: int) -> Optional[AvroSchema]:
        """Fetch the schema registered under ``identifier``.

        Returns:
            The schema, or None if the identifier is unknown
        """

    @abstractmethod
    def get_id_by_schema(self, schema: AvroSchema) -> Optional[int]:
        """Look up the identifier of an already registered schema.

        Returns:
            The identifier, or None if the schema is not registered under its subject
        """

    @abstractmethod
    def register_schema(self, schema: AvroSchema) -> int:
        """Register ``schema`` under its subject.

        Registering a schema that is already registered returns the existing
        identifier.

        Returns:
            Identifier assigned by the registry
        """

    @abstractmethod
    def check_compatibility(self, schema: AvroSchema) -> bool:
        """Check ``schema`` against the versions registered under its subject.

        Returns:
            True if the subject's compatibility level allows ``schema``
        """

    @abstractmethod
    def get_compatibility_level(self, subject: str) -> Optional[CompatibilityLevel]:
        """Read the compatibility level configured for ``subject``.

        Returns:
            The level, or None if the subject has no explicit configuration
        """

    @abstractmethod
    def set_compatibility_level(
        self, subject: str, level: CompatibilityLevel
    ) -> CompatibilityLevel:
        """Configure the compatibility level for ``subject``.

        Returns:
            The level now in effect
        """
