"""fastavro-backed codec for Pydantic models.

This module provides FastAvroCodec, which writes Pydantic model instances
with ``fastavro.schemaless_writer`` and reads them back with
``fastavro.schemaless_reader`` followed by ``model_validate``.

Decoding resolves the writer schema (from the registry) against the codec's
reader schema, so records written by older or newer producers decode as long
as Avro schema resolution allows it.
"""

from __future__ import annotations

import logging
import struct
from io import BytesIO
from typing import Any, Dict, Mapping, Type, TypeVar, Union

import fastavro
from fastavro.read import SchemaResolutionError
from fastavro.schema import SchemaParseException, UnknownType
from pydantic import BaseModel, ValidationError

from ..exceptions import EncodeError, SchemaError, UnsupportedSchemaType
from ..result import DecodeFailure, DecodeFailureReason, Err, Ok, Result
from ..schema.descriptor import AvroSchema, SchemaKind
from ..schema.dispatch import resolve_members
from .base import AvroCodec, EncodedValue

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ModelSpec = Union[Type[BaseModel], Mapping[str, Type[BaseModel]]]


def _parse_fastavro(schema: AvroSchema) -> Dict[str, Any]:
    try:
        return fastavro.parse_schema(schema.raw)
    except (SchemaParseException, UnknownType, ValueError, TypeError) as err:
        raise SchemaError(f"fastavro rejected schema {schema}: {err}") from err


class FastAvroCodec(AvroCodec[M]):
    """Avro codec for Pydantic models using fastavro.

    A record schema maps to a single model class. A union schema (tagged ADT)
    maps each record branch, by full name, to its own model class; the
    branch matching the value's class is used for encoding.

    Attributes:
        models: Model class per record full name

    Example:
        >>> class User(BaseModel):
        ...     id: int
        ...     name: str
        >>> codec = FastAvroCodec(
        ...     {"type": "record", "name": "User", "namespace": "com.example",
        ...      "fields": [{"name": "id", "type": "long"}, {"name": "name", "type": "string"}]},
        ...     User,
        ... )
        >>> encoded = codec.encode(User(id=1, name="Ada"))
        >>> codec.decode(encoded.payload, encoded.schema).unwrap()
        User(id=1, name='Ada')
    """

    def __init__(self, schema: Any, model: ModelSpec) -> None:
        """Create a codec for ``schema``.

        Args:
            schema: Record or union schema (any form AvroSchema.parse accepts)
            model: Model class for a record schema, or a mapping of branch
                full name to model class for a union schema

        Raises:
            SchemaError: If the models do not match the schema branches
            UnsupportedSchemaType: If the schema is neither record nor union
        """
        self._schema = AvroSchema.parse(schema)
        members = resolve_members(self._schema)

        if self._schema.kind is SchemaKind.RECORD:
            if not isinstance(model, type):
                raise SchemaError("A record schema requires a single model class")
            self.models: Dict[str, Type[BaseModel]] = {self._schema.full_name: model}
        else:
            if isinstance(model, type):
                raise SchemaError("A union schema requires a mapping of full name to model class")
            for member in members:
                if member.kind is not SchemaKind.RECORD:
                    raise UnsupportedSchemaType(member.type)
            self.models = dict(model)

        self._members = {member.full_name: member for member in members}
        missing = sorted(set(self._members) - set(self.models))
        unknown = sorted(set(self.models) - set(self._members))
        if missing or unknown:
            raise SchemaError(
                f"Models do not match schema {self._schema}: "
                f"missing models for {missing}, unknown names {unknown}"
            )

        self._readers = {name: _parse_fastavro(member) for name, member in self._members.items()}
        self._writers: Dict[AvroSchema, Dict[str, Any]] = {}

    @property
    def schema(self) -> AvroSchema:
        return self._schema

    def encode(self, value: M) -> EncodedValue:
        """Encode a model instance against its matching record schema.

        Raises:
            EncodeError: If no branch matches the value's class, or fastavro
                cannot write the value
        """
        name = self._branch_for(value)
        member = self._members[name]

        buffer = BytesIO()
        try:
            fastavro.schemaless_writer(buffer, self._readers[name], value.model_dump(by_alias=True))
        except (ValueError, TypeError, KeyError, AttributeError, OverflowError) as err:
            raise EncodeError(f"Cannot encode {type(value).__name__} as {name}: {err}") from err

        payload = buffer.getvalue()
        logger.debug("Encoded %s to %d Avro bytes", name, len(payload))
        return EncodedValue(schema=member, payload=payload)

    def decode(self, payload: bytes, writer_schema: AvroSchema) -> Result[M, DecodeFailure]:
        """Decode Avro bytes written with ``writer_schema`` into a model instance.

        Returns:
            Ok(model instance) or Err(DecodeFailure)

        Raises:
            SchemaError: If fastavro cannot parse the writer schema
        """
        reader = self._reader_for(writer_schema)
        if reader is None:
            return Err(
                DecodeFailure(
                    DecodeFailureReason.SCHEMA_MISMATCH,
                    f"Writer schema {writer_schema} does not match any branch of {self._schema}",
                )
            )

        parsed_writer = self._writers.get(writer_schema)
        if parsed_writer is None:
            parsed_writer = self._writers[writer_schema] = _parse_fastavro(writer_schema)

        try:
            record = fastavro.schemaless_reader(
                BytesIO(payload), parsed_writer, self._readers[reader.full_name]
            )
        except SchemaResolutionError as err:
            return Err(DecodeFailure(DecodeFailureReason.SCHEMA_MISMATCH, str(err)))
        except (
            EOFError,
            StopIteration,
            ValueError,
            TypeError,
            IndexError,
            OverflowError,
            struct.error,
        ) as err:
            return Err(
                DecodeFailure(
                    DecodeFailureReason.MALFORMED_PAYLOAD,
                    f"Cannot read {writer_schema} payload: {err!r}",
                )
            )

        model = self.models[reader.full_name]
        try:
            return Ok(model.model_validate(record))
        except ValidationError as err:
            return Err(_validation_failure(model, err))

    def _branch_for(self, value: BaseModel) -> str:
        for name, model in self.models.items():
            if type(value) is model:
                return name
        for name, model in self.models.items():
            if isinstance(value, model):
                return name
        raise EncodeError(
            f"{type(value).__name__} has no matching branch in schema {self._schema}. "
            f"Known branches: {sorted(self.models)}"
        )

    def _reader_for(self, writer_schema: AvroSchema) -> AvroSchema | None:
        member = self._members.get(writer_schema.full_name)
        if member is not None:
            return member
        for member in self._members.values():
            if writer_schema.full_name in member.aliases:
                return member
        return None


def _validation_failure(model: Type[BaseModel], err: ValidationError) -> DecodeFailure:
    details = err.errors()
    reason = (
        DecodeFailureReason.MISSING_FIELD
        if any(detail["type"] == "missing" for detail in details)
        else DecodeFailureReason.TYPE_MISMATCH
    )
    return DecodeFailure(
        reason,
        f"{model.__name__} validation failed with {len(details)} error(s)",
        tuple(
            f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
            for detail in details
        ),
    )
