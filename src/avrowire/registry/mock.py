"""In-memory schema registry for tests and local development.

This module provides MockSchemaRegistry, a SchemaRegistryClient that keeps
subjects, versions and compatibility levels in memory. It follows the
behaviour of Confluent Schema Registry where avrowire depends on it:

- Subjects are schema full names; each subject holds an ordered version list
- Identifiers are global: an identical schema always gets the same identifier
- Registering an already registered schema is idempotent
- Compatibility is evaluated with Avro schema resolution rules
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ..exceptions import IncompatibleSchemaError, SubjectNotFoundError, UnsupportedSchemaType
from ..schema.descriptor import AvroSchema
from .client import SchemaRegistryClient
from .compatibility import CompatibilityLevel
from .config import MockRegistryConfig
from .rules import is_compatible

logger = logging.getLogger(__name__)


class MockSchemaRegistry(SchemaRegistryClient):
    """Simulated schema registry backed by dictionaries.

    Every client call is appended to ``calls`` as a tuple of the method name
    and its arguments, so tests can assert on the exact call sequence.

    Attributes:
        config: Registry configuration
        calls: Recorded client calls, in order

    Examples:
        ```python
        from avrowire.registry import CompatibilityLevel, MockSchemaRegistry

        registry = MockSchemaRegistry()
        identifier = registry.register_schema(user_v1)

        registry.set_compatibility_level("com.example.User", CompatibilityLevel.FULL)
        registry.check_compatibility(user_v2)  # False if v2 breaks FULL
        ```
    """

    def __init__(self, config: MockRegistryConfig | None = None) -> None:
        """Initialize an empty registry.

        Args:
            config: Registry configuration. If None, uses default config.
        """
        self.config = config if config is not None else MockRegistryConfig()
        self.calls: List[Tuple[object, ...]] = []
        self._lock = Lock()
        self._next_id = self.config.first_id
        self._schemas_by_id: Dict[int, AvroSchema] = {}
        self._ids_by_schema: Dict[AvroSchema, int] = {}
        self._subjects: Dict[str, List[AvroSchema]] = {}
        self._levels: Dict[str, CompatibilityLevel] = {}

    # ------------------------------------------------------------------
    # SchemaRegistryClient
    # ------------------------------------------------------------------

    def get_schema_by_id(self, identifier: int) -> Optional[AvroSchema]:
        with self._lock:
            self.calls.append(("get_schema_by_id", identifier))
            return self._schemas_by_id.get(identifier)

    def get_id_by_schema(self, schema: AvroSchema) -> Optional[int]:
        with self._lock:
            self.calls.append(("get_id_by_schema", schema))
            if schema not in self._subjects.get(schema.full_name or "", []):
                return None
            return self._ids_by_schema[schema]

    def register_schema(self, schema: AvroSchema) -> int:
        with self._lock:
            self.calls.append(("register_schema", schema))
            subject = _subject(schema)
            versions = self._subjects.setdefault(subject, [])

            if schema in versions:
                return self._ids_by_schema[schema]

            if self.config.enforce_compatibility:
                level = self._effective_level(subject)
                if not is_compatible(schema, versions, level):
                    raise IncompatibleSchemaError(subject, level.value)

            identifier = self._ids_by_schema.get(schema)
            if identifier is None:
                identifier = self._next_id
                self._next_id += 1
                self._ids_by_schema[schema] = identifier
                self._schemas_by_id[identifier] = schema

            versions.append(schema)
            logger.info(
                "Registered %s version %d with schema id %d", subject, len(versions), identifier
            )
            return identifier

    def check_compatibility(self, schema: AvroSchema) -> bool:
        with self._lock:
            self.calls.append(("check_compatibility", schema))
            subject = _subject(schema)
            level = self._effective_level(subject)
            compatible = is_compatible(schema, self._subjects.get(subject, []), level)
            if not compatible:
                logger.warning("Schema for %s is not %s compatible", subject, level.value)
            return compatible

    def get_compatibility_level(self, subject: str) -> Optional[CompatibilityLevel]:
        with self._lock:
            self.calls.append(("get_compatibility_level", subject))
            return self._levels.get(subject)

    def set_compatibility_level(
        self, subject: str, level: CompatibilityLevel
    ) -> CompatibilityLevel:
        with self._lock:
            self.calls.append(("set_compatibility_level", subject, level))
            level = CompatibilityLevel(level)
            self._levels[subject] = level
            logger.info("Compatibility level for %s set to %s", subject, level.value)
            return level

    # ------------------------------------------------------------------
    # Inspection helpers (not part of the client contract)
    # ------------------------------------------------------------------

    def subjects(self) -> List[str]:
        """List subjects with at least one registered version."""
        with self._lock:
            return sorted(subject for subject, versions in self._subjects.items() if versions)

    def versions(self, subject: str) -> List[AvroSchema]:
        """Return all versions of ``subject``, oldest first.

        Raises:
            SubjectNotFoundError: If the subject has no versions
        """
        with self._lock:
            versions = self._subjects.get(subject)
            if not versions:
                raise SubjectNotFoundError(subject)
            return list(versions)

    def latest(self, subject: str) -> AvroSchema:
        """Return the latest version of ``subject``.

        Raises:
            SubjectNotFoundError: If the subject has no versions
        """
        return self.versions(subject)[-1]

    def _effective_level(self, subject: str) -> CompatibilityLevel:
        return self._levels.get(subject, self.config.default_compatibility)


def _subject(schema: AvroSchema) -> str:
    if schema.full_name is None:
        raise UnsupportedSchemaType(schema.type)
    return schema.full_name
