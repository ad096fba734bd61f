"""Unit tests for the fastavro codec."""

from __future__ import annotations

from typing import Optional

import pytest
from pydantic import BaseModel

from avrowire.codec import EncodedValue, FastAvroCodec
from avrowire.exceptions import EncodeError, SchemaError, UnsupportedSchemaType
from avrowire.orchestrator import register_schemas
from avrowire.registry import MockSchemaRegistry
from avrowire.result import DecodeFailureReason
from avrowire.schema import AvroSchema
from avrowire.serde import decode, encode


class User(BaseModel):
    """Version 1 user."""

    id: int
    name: str


class UserV2(BaseModel):
    """Version 2 user with an optional email."""

    id: int
    name: str
    email: Optional[str] = None


class AdminUser(User):
    """Subclass of User, encoded through the User branch."""

    pass


class NotStarted(BaseModel):
    step: int


class DateSelected(BaseModel):
    step: int
    date: str


class Cancelled(BaseModel):
    step: int


BOOKING_MODELS = {
    "com.example.booking.NotStarted": NotStarted,
    "com.example.booking.DateSelected": DateSelected,
    "com.example.booking.Cancelled": Cancelled,
}


class TestRecordCodec:
    """Test a codec over a single record schema."""

    def test_encode_known_bytes(self, user_schema: AvroSchema, sample_payload: bytes) -> None:
        """Test Avro binary layout of a small record."""
        codec = FastAvroCodec(user_schema, User)

        encoded = codec.encode(User(id=1, name="Ada"))

        assert encoded == EncodedValue(schema=user_schema, payload=sample_payload)

    def test_roundtrip(self, user_schema: AvroSchema) -> None:
        """Test encode then decode with the same schema."""
        codec = FastAvroCodec(user_schema, User)
        user = User(id=123456789012, name="Grace Hopper")

        encoded = codec.encode(user)
        result = codec.decode(encoded.payload, encoded.schema)

        assert result.is_ok()
        assert result.unwrap() == user

    def test_accepts_raw_definition(self) -> None:
        """Test the schema may be given as JSON text."""
        codec = FastAvroCodec(
            '{"type": "record", "name": "User", "fields": ['
            '{"name": "id", "type": "long"}, {"name": "name", "type": "string"}]}',
            User,
        )

        assert codec.schema.full_name == "User"
        assert codec.models == {"User": User}

    def test_subclass_uses_parent_branch(self, user_schema: AvroSchema) -> None:
        """Test subclasses of the model encode with its schema."""
        codec = FastAvroCodec(user_schema, User)

        encoded = codec.encode(AdminUser(id=1, name="root"))

        assert encoded.schema == user_schema

    def test_wrong_model_type(self, user_schema: AvroSchema) -> None:
        """Test values of an unrelated class are rejected."""
        codec = FastAvroCodec(user_schema, User)

        with pytest.raises(EncodeError, match="no matching branch"):
            codec.encode(NotStarted(step=1))

    def test_unwritable_value(self) -> None:
        """Test fastavro write errors surface as EncodeError."""

        class Loose(BaseModel):
            id: int
            name: Optional[str] = None

        codec = FastAvroCodec(
            {
                "type": "record",
                "name": "Loose",
                "fields": [{"name": "id", "type": "long"}, {"name": "name", "type": "string"}],
            },
            Loose,
        )

        with pytest.raises(EncodeError, match="Cannot encode Loose"):
            codec.encode(Loose(id=1))

    def test_record_requires_class(self, user_schema: AvroSchema) -> None:
        with pytest.raises(SchemaError, match="single model class"):
            FastAvroCodec(user_schema, {"com.example.User": User})

    def test_unsupported_schema(self) -> None:
        """Test primitive schemas cannot back a codec."""
        with pytest.raises(UnsupportedSchemaType):
            FastAvroCodec("string", User)


class TestSchemaEvolution:
    """Test decoding with a writer schema different from the reader schema."""

    def test_old_writer_new_reader(
        self, user_schema: AvroSchema, user_v2_schema: AvroSchema
    ) -> None:
        """Test a v2 reader fills the new field from its default."""
        payload = FastAvroCodec(user_schema, User).encode(User(id=1, name="Ada")).payload
        reader = FastAvroCodec(user_v2_schema, UserV2)

        result = reader.decode(payload, user_schema)

        assert result.unwrap() == UserV2(id=1, name="Ada", email=None)

    def test_new_writer_old_reader(
        self, user_schema: AvroSchema, user_v2_schema: AvroSchema
    ) -> None:
        """Test a v1 reader skips the field it does not know."""
        payload = (
            FastAvroCodec(user_v2_schema, UserV2)
            .encode(UserV2(id=2, name="Linus", email="linus@example.com"))
            .payload
        )
        reader = FastAvroCodec(user_schema, User)

        result = reader.decode(payload, user_v2_schema)

        assert result.unwrap() == User(id=2, name="Linus")


class TestDecodeFailures:
    """Test value-level failures are returned, not raised."""

    def test_truncated_payload(self, user_schema: AvroSchema) -> None:
        """Test a payload cut before the string field."""
        codec = FastAvroCodec(user_schema, User)

        result = codec.decode(b"\x02", user_schema)

        assert result.is_err()
        assert result.error.reason is DecodeFailureReason.MALFORMED_PAYLOAD

    def test_empty_payload(self, user_schema: AvroSchema) -> None:
        codec = FastAvroCodec(user_schema, User)

        result = codec.decode(b"", user_schema)

        assert result.error.reason is DecodeFailureReason.MALFORMED_PAYLOAD

    def test_unrelated_writer(self, user_schema: AvroSchema) -> None:
        """Test a writer schema matching no reader branch."""
        other = AvroSchema.parse(
            {"type": "record", "name": "Order", "fields": [{"name": "id", "type": "long"}]}
        )
        codec = FastAvroCodec(user_schema, User)

        result = codec.decode(b"\x02", other)

        assert result.error.reason is DecodeFailureReason.SCHEMA_MISMATCH
        assert "Order" in result.error.message

    def test_unresolvable_field_type(self, user_schema: AvroSchema) -> None:
        """Test a writer field type the reader cannot promote."""
        writer = AvroSchema.parse(
            {
                "type": "record",
                "name": "User",
                "namespace": "com.example",
                "fields": [
                    {"name": "id", "type": "string"},
                    {"name": "name", "type": "string"},
                ],
            }
        )
        codec = FastAvroCodec(user_schema, User)

        result = codec.decode(b"\x02\x31\x06Ada", writer)

        assert result.error.reason is DecodeFailureReason.SCHEMA_MISMATCH

    def test_missing_field(self) -> None:
        """Test a model field absent from the decoded record."""
        schema = AvroSchema.parse(
            {"type": "record", "name": "User", "fields": [{"name": "id", "type": "long"}]}
        )
        codec = FastAvroCodec(schema, User)

        result = codec.decode(b"\x02", schema)

        assert result.error.reason is DecodeFailureReason.MISSING_FIELD
        assert result.error.errors == ("name: Field required",)

    def test_type_mismatch(self) -> None:
        """Test a decoded value the model rejects."""

        class Named(BaseModel):
            id: str

        schema = AvroSchema.parse(
            {"type": "record", "name": "Named", "fields": [{"name": "id", "type": "long"}]}
        )
        codec = FastAvroCodec(schema, Named)

        result = codec.decode(b"\x02", schema)

        assert result.error.reason is DecodeFailureReason.TYPE_MISMATCH
        assert result.error.errors[0].startswith("id: ")


class TestUnionCodec:
    """Test a codec over a tagged union of records."""

    def test_encode_picks_branch(self, booking_schema: AvroSchema) -> None:
        """Test the value's class selects the branch schema."""
        codec = FastAvroCodec(booking_schema, BOOKING_MODELS)

        encoded = codec.encode(DateSelected(step=2, date="2024-05-01"))

        assert encoded.schema.full_name == "com.example.booking.DateSelected"

    def test_same_shape_branches(self, booking_schema: AvroSchema) -> None:
        """Test branches with identical fields are told apart by class."""
        codec = FastAvroCodec(booking_schema, BOOKING_MODELS)

        assert codec.encode(NotStarted(step=0)).schema.name == "NotStarted"
        assert codec.encode(Cancelled(step=0)).schema.name == "Cancelled"

    def test_roundtrip_each_branch(self, booking_schema: AvroSchema) -> None:
        codec = FastAvroCodec(booking_schema, BOOKING_MODELS)

        for value in [NotStarted(step=0), DateSelected(step=1, date="2024-05-01"), Cancelled(step=2)]:
            encoded = codec.encode(value)
            decoded = codec.decode(encoded.payload, encoded.schema).unwrap()

            assert type(decoded) is type(value)
            assert decoded == value

    def test_missing_model(self, booking_schema: AvroSchema) -> None:
        """Test every branch needs a model and every model a branch."""
        models = {
            "com.example.booking.NotStarted": NotStarted,
            "com.example.booking.Unknown": Cancelled,
        }

        with pytest.raises(SchemaError, match="missing models for") as exc_info:
            FastAvroCodec(booking_schema, models)

        assert "com.example.booking.DateSelected" in str(exc_info.value)
        assert "com.example.booking.Unknown" in str(exc_info.value)

    def test_union_requires_mapping(self, booking_schema: AvroSchema) -> None:
        with pytest.raises(SchemaError, match="mapping"):
            FastAvroCodec(booking_schema, NotStarted)

    def test_non_record_branch(self) -> None:
        """Test unions may only carry records besides null."""
        union = AvroSchema.parse(
            ["null", "string", {"type": "record", "name": "A", "fields": []}]
        )

        with pytest.raises(UnsupportedSchemaType):
            FastAvroCodec(union, {"A": NotStarted})


class Address(BaseModel):
    city: str


class Home(BaseModel):
    addr: Address


class Work(BaseModel):
    addr: Address


SHARED_ADDRESS_SCHEMA = [
    {
        "type": "record",
        "name": "Home",
        "namespace": "ex",
        "fields": [
            {
                "name": "addr",
                "type": {
                    "type": "record",
                    "name": "Address",
                    "fields": [{"name": "city", "type": "string"}],
                },
            }
        ],
    },
    {
        "type": "record",
        "name": "Work",
        "namespace": "ex",
        "fields": [{"name": "addr", "type": "ex.Address"}],
    },
]


class TestSharedNamedTypes:
    """Test unions whose branches share a named type."""

    def test_roundtrip_each_branch(self) -> None:
        """Test both branches encode and decode, including the one referring by name."""
        codec = FastAvroCodec(SHARED_ADDRESS_SCHEMA, {"ex.Home": Home, "ex.Work": Work})

        for value in [Home(addr=Address(city="Lyon")), Work(addr=Address(city="Paris"))]:
            encoded = codec.encode(value)
            decoded = codec.decode(encoded.payload, encoded.schema).unwrap()

            assert type(decoded) is type(value)
            assert decoded == value

    def test_registry_roundtrip(self, registry: MockSchemaRegistry) -> None:
        """Test registered branches can be fetched back and used as writer schemas."""
        codec = FastAvroCodec(SHARED_ADDRESS_SCHEMA, {"ex.Home": Home, "ex.Work": Work})
        registered = register_schemas(codec.schema, registry)

        work = Work(addr=Address(city="Oslo"))
        data = encode(work, codec, registry)
        writer = registry.get_schema_by_id(registered[1].identifier)

        assert writer.full_name == "ex.Work"
        assert AvroSchema.parse(writer.to_json()) == writer
        assert decode(data, codec, registry).unwrap() == work
