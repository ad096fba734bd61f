"""Avro schema descriptors.

This module wraps parsed Avro schema JSON in a small immutable descriptor that
exposes what the envelope layer needs: the Avro type, the dispatch kind, the
full name used as registry subject, and the ordered branches of a union.

The descriptor does not validate defaults or logical types; fastavro does
that when the schema is used for encoding.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Set, Tuple

from ..exceptions import SchemaError

PRIMITIVE_TYPES = frozenset(
    {"null", "boolean", "int", "long", "float", "double", "bytes", "string"}
)
NAMED_TYPES = frozenset({"record", "error", "enum", "fixed"})


class SchemaKind(enum.Enum):
    """How a schema is dispatched for registration and verification."""

    RECORD = "record"
    UNION = "union"
    OTHER = "other"


@dataclass(frozen=True)
class AvroField:
    """A single field of an Avro record.

    Attributes:
        name: Field name
        schema: Field type
        has_default: Whether the field declares a default value
        default: Declared default (None when absent or explicitly null)
        aliases: Alternative names accepted during schema resolution
    """

    name: str
    schema: AvroSchema
    has_default: bool = False
    default: Any = None
    aliases: Tuple[str, ...] = ()


@dataclass(frozen=True, eq=False)
class AvroSchema:
    """Immutable descriptor of a parsed Avro schema.

    Two descriptors are equal when their full name and canonical JSON text
    are equal, so a descriptor can be used as a dictionary key for registry
    lookups.

    Each branch of a parsed union is self-contained: the first use of a named
    type defined elsewhere in the union is written out in full, so a branch
    can be registered and parsed on its own.

    Attributes:
        raw: The JSON-compatible schema definition (str, dict or list)
        type: Avro type name ("record", "union", "int", ...)
        name: Short name for named types
        namespace: Namespace for named types
        members: Union branches in declared order
        fields: Record fields in declared order
        items: Array item schema
        values: Map value schema
        symbols: Enum symbols
        size: Fixed size in bytes
        aliases: Full-name aliases for named types
        enum_default: Enum fallback symbol

    Example:
        >>> schema = AvroSchema.parse({
        ...     "type": "record",
        ...     "name": "User",
        ...     "namespace": "com.example",
        ...     "fields": [{"name": "id", "type": "long"}],
        ... })
        >>> schema.full_name
        'com.example.User'
        >>> schema.kind
        <SchemaKind.RECORD: 'record'>
    """

    raw: Any
    type: str
    name: Optional[str] = None
    namespace: Optional[str] = None
    members: Tuple[AvroSchema, ...] = ()
    fields: Tuple[AvroField, ...] = ()
    items: Optional[AvroSchema] = None
    values: Optional[AvroSchema] = None
    symbols: Tuple[str, ...] = ()
    size: Optional[int] = None
    aliases: Tuple[str, ...] = ()
    enum_default: Optional[str] = None
    canonical: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        raw = self.type if self.type in PRIMITIVE_TYPES and _is_bare(self.raw) else self.raw
        text = json.dumps(raw, sort_keys=True, separators=(",", ":"))
        # Inherited namespaces are not part of the raw JSON
        canonical = f"{self.full_name}:{text}" if self.full_name else text
        object.__setattr__(self, "canonical", canonical)

    @classmethod
    def parse(cls, definition: Any) -> AvroSchema:
        """Parse an Avro schema definition.

        Args:
            definition: Schema as JSON text, a dict, a list (union) or a
                primitive type name

        Returns:
            AvroSchema descriptor

        Raises:
            SchemaError: If the definition is not a valid Avro schema
        """
        if isinstance(definition, AvroSchema):
            return definition
        if isinstance(definition, (str, bytes)):
            try:
                text = definition.decode("utf-8") if isinstance(definition, bytes) else definition
            except UnicodeDecodeError as err:
                raise SchemaError(f"Schema is not valid UTF-8: {err}") from err
            stripped = text.strip()
            if stripped[:1] in ("{", "[", '"'):
                try:
                    definition = json.loads(stripped)
                except json.JSONDecodeError as err:
                    raise SchemaError(f"Schema is not valid JSON: {err}") from err
            else:
                definition = stripped
        names: Dict[str, AvroSchema] = {}
        schema = _parse(definition, None, names)
        if schema.type == "union":
            members = tuple(
                replace(member, raw=_standalone(member.raw, None, names, set()))
                if member.is_named and isinstance(member.raw, dict)
                else member
                for member in schema.members
            )
            schema = replace(schema, members=members)
        return schema

    @property
    def kind(self) -> SchemaKind:
        """Dispatch kind: RECORD, UNION, or OTHER for everything else."""
        if self.type in ("record", "error"):
            return SchemaKind.RECORD
        if self.type == "union":
            return SchemaKind.UNION
        return SchemaKind.OTHER

    @property
    def full_name(self) -> Optional[str]:
        """Namespace-qualified name, or None for unnamed types."""
        if self.name is None:
            return None
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def is_named(self) -> bool:
        return self.type in NAMED_TYPES

    def get_field(self, name: str) -> Optional[AvroField]:
        """Look up a record field by name."""
        for avro_field in self.fields:
            if avro_field.name == name:
                return avro_field
        return None

    def to_json(self) -> str:
        """Serialize the schema definition to JSON text."""
        return json.dumps(self.raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AvroSchema):
            return NotImplemented
        return self.canonical == other.canonical

    def __hash__(self) -> int:
        return hash(self.canonical)

    def __str__(self) -> str:
        return self.full_name or self.type


def _is_bare(raw: Any) -> bool:
    return isinstance(raw, str) or (isinstance(raw, dict) and set(raw) == {"type"})


def _qualify(name: str, namespace: Optional[str]) -> Tuple[str, Optional[str]]:
    """Split a possibly dotted name into (short name, namespace)."""
    if "." in name:
        namespace, _, name = name.rpartition(".")
        return name, namespace or None
    return name, namespace


def _join(name: str, namespace: Optional[str]) -> str:
    return f"{namespace}.{name}" if namespace else name


def _resolve(reference: str, namespace: Optional[str], names: Dict[str, AvroSchema]) -> str:
    """Full name of a named reference: relative to ``namespace`` first, then as written."""
    candidates = [reference]
    if namespace and "." not in reference:
        candidates.insert(0, f"{namespace}.{reference}")
    for candidate in candidates:
        if candidate in names:
            return candidate
    raise SchemaError(f"Unknown type: {reference!r}")


def _standalone(
    raw: Any, namespace: Optional[str], names: Dict[str, AvroSchema], defined: Set[str]
) -> Any:
    """Copy ``raw`` with the first use of each named type written out in full.

    ``defined`` collects the full names already written in this copy; later
    references to them are kept as names.
    """
    if isinstance(raw, list):
        return [_standalone(item, namespace, names, defined) for item in raw]

    if isinstance(raw, str):
        if raw in PRIMITIVE_TYPES:
            return raw
        full_name = _resolve(raw, namespace, names)
        if full_name in defined:
            return raw
        target = names[full_name]
        # Explicit namespace so the definition keeps its full name wherever it lands
        inline = dict(target.raw, name=target.name, namespace=target.namespace or "")
        return _standalone(inline, namespace, names, defined)

    if not isinstance(raw, dict):
        return raw

    avro_type = raw.get("type")
    if not isinstance(avro_type, str) or avro_type not in (
        PRIMITIVE_TYPES | NAMED_TYPES | {"array", "map"}
    ):
        # Wrapped schema, or a reference written as {"type": "com.example.User"}
        return dict(raw, type=_standalone(avro_type, namespace, names, defined))

    copied = dict(raw)
    if avro_type in NAMED_TYPES:
        name, own_namespace = _qualify(raw["name"], raw.get("namespace", namespace))
        defined.add(_join(name, own_namespace))
        if "fields" in raw:
            copied["fields"] = [
                dict(raw_field, type=_standalone(raw_field["type"], own_namespace, names, defined))
                for raw_field in raw["fields"]
            ]
    elif avro_type == "array":
        copied["items"] = _standalone(raw["items"], namespace, names, defined)
    elif avro_type == "map":
        copied["values"] = _standalone(raw["values"], namespace, names, defined)
    return copied


def _parse(definition: Any, namespace: Optional[str], names: Dict[str, AvroSchema]) -> AvroSchema:
    """Parse a definition, resolving named references against ``names``."""
    if isinstance(definition, list):
        members = []
        for member in definition:
            parsed = _parse(member, namespace, names)
            if parsed.type == "union":
                raise SchemaError("Unions may not immediately contain other unions")
            members.append(parsed)
        return AvroSchema(raw=definition, type="union", members=tuple(members))

    if isinstance(definition, str):
        if definition in PRIMITIVE_TYPES:
            return AvroSchema(raw=definition, type=definition)
        return names[_resolve(definition, namespace, names)]

    if not isinstance(definition, dict):
        raise SchemaError(f"Invalid schema definition: {definition!r}")

    avro_type = definition.get("type")
    if avro_type is None:
        raise SchemaError(f"Schema has no 'type': {definition!r}")
    if not isinstance(avro_type, str):
        # {"type": {...}} or {"type": [...]} wraps another schema
        return _parse(avro_type, namespace, names)

    if avro_type in PRIMITIVE_TYPES:
        return AvroSchema(raw=definition, type=avro_type)

    if avro_type == "array":
        if "items" not in definition:
            raise SchemaError("Array schema requires 'items'")
        return AvroSchema(
            raw=definition, type="array", items=_parse(definition["items"], namespace, names)
        )

    if avro_type == "map":
        if "values" not in definition:
            raise SchemaError("Map schema requires 'values'")
        return AvroSchema(
            raw=definition, type="map", values=_parse(definition["values"], namespace, names)
        )

    if avro_type in NAMED_TYPES:
        return _parse_named(definition, avro_type, namespace, names)

    # A bare reference written as {"type": "com.example.User"}
    return _parse(avro_type, namespace, names)


def _parse_named(
    definition: Dict[str, Any],
    avro_type: str,
    namespace: Optional[str],
    names: Dict[str, AvroSchema],
) -> AvroSchema:
    raw_name = definition.get("name")
    if not isinstance(raw_name, str) or not raw_name:
        raise SchemaError(f"Named type {avro_type!r} requires a 'name'")

    name, own_namespace = _qualify(raw_name, definition.get("namespace", namespace))
    full_name = _join(name, own_namespace)
    aliases = tuple(
        _join(*_qualify(alias, own_namespace)) for alias in definition.get("aliases", [])
    )

    if avro_type == "enum":
        symbols = definition.get("symbols")
        if not isinstance(symbols, list):
            raise SchemaError(f"Enum {full_name} requires a 'symbols' list")
        schema = AvroSchema(
            raw=definition,
            type="enum",
            name=name,
            namespace=own_namespace,
            symbols=tuple(symbols),
            aliases=aliases,
            enum_default=definition.get("default"),
        )
        names[full_name] = schema
        return schema

    if avro_type == "fixed":
        size = definition.get("size")
        if not isinstance(size, int) or size < 0:
            raise SchemaError(f"Fixed {full_name} requires a non-negative integer 'size'")
        schema = AvroSchema(
            raw=definition,
            type="fixed",
            name=name,
            namespace=own_namespace,
            size=size,
            aliases=aliases,
        )
        names[full_name] = schema
        return schema

    raw_fields = definition.get("fields")
    if not isinstance(raw_fields, list):
        raise SchemaError(f"Record {full_name} requires a 'fields' list")

    # Stub so fields can refer back to the record being defined
    names[full_name] = AvroSchema(
        raw=full_name, type=avro_type, name=name, namespace=own_namespace, aliases=aliases
    )

    fields = []
    for raw_field in raw_fields:
        if not isinstance(raw_field, dict) or "name" not in raw_field or "type" not in raw_field:
            raise SchemaError(f"Record {full_name} has a field without 'name' or 'type'")
        fields.append(
            AvroField(
                name=raw_field["name"],
                schema=_parse(raw_field["type"], own_namespace, names),
                has_default="default" in raw_field,
                default=raw_field.get("default"),
                aliases=tuple(raw_field.get("aliases", [])),
            )
        )

    schema = AvroSchema(
        raw=definition,
        type=avro_type,
        name=name,
        namespace=own_namespace,
        fields=tuple(fields),
        aliases=aliases,
    )
    names[full_name] = schema
    return schema
