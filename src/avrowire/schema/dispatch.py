"""Schema kind dispatch.

Records and unions of records are the only shapes that carry a full name,
so they are the only shapes that can be registered or verified under a
subject. A union (tagged ADT) registers each non-null branch separately.
"""

from __future__ import annotations

from typing import List

from ..exceptions import UnsupportedSchemaType
from .descriptor import AvroSchema, SchemaKind


def resolve_members(schema: AvroSchema) -> List[AvroSchema]:
    """Resolve the concrete schemas to register or verify for ``schema``.

    Args:
        schema: Record or union schema

    Returns:
        ``[schema]`` for a record; the union branches without ``null``, in
        declared order, for a union

    Raises:
        UnsupportedSchemaType: For any other schema type

    Example:
        >>> union = AvroSchema.parse(["null", {"type": "record", "name": "A", "fields": []}])
        >>> [member.full_name for member in resolve_members(union)]
        ['A']
    """
    if schema.kind is SchemaKind.RECORD:
        return [schema]
    if schema.kind is SchemaKind.UNION:
        return [member for member in schema.members if member.type != "null"]
    raise UnsupportedSchemaType(schema.type)
