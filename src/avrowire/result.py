"""Explicit success/failure values for Avro decoding.

Protocol and registry problems are raised as exceptions. Value-level decode
problems (truncated payload, missing field, type mismatch) are expected
outcomes, for example when routing bad records to a dead-letter topic, so
they are returned as ``Err(DecodeFailure(...))`` instead.

Example:
    >>> result = Ok(41).map(lambda n: n + 1)
    >>> result.unwrap()
    42
    >>> Err("boom").unwrap_or(0)
    0
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, NoReturn, Tuple, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class DecodeFailureReason(enum.Enum):
    """Why an Avro payload could not be decoded into the target type."""

    MALFORMED_PAYLOAD = "malformed_payload"
    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    SCHEMA_MISMATCH = "schema_mismatch"


@dataclass(frozen=True)
class DecodeFailure:
    """Structured description of a value-level decode failure.

    Attributes:
        reason: Failure category
        message: Human readable description
        errors: Per-field error details (e.g. pydantic validation errors)
    """

    reason: DecodeFailureReason
    message: str
    errors: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result wrapping ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, func: Callable[[T], U]) -> Ok[U]:
        return Ok(func(self.value))

    def and_then(self, func: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return func(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result wrapping ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, func: Callable[[object], object]) -> Err[E]:
        return self

    def and_then(self, func: Callable[[object], object]) -> Err[E]:
        return self

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap() on an Err result: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Ok[T], Err[E]]


def sequence(results: Iterable[Result[T, E]]) -> Result[List[T], E]:
    """Collect results into a single result, preserving order.

    Stops at the first Err and returns it; otherwise returns Ok with all
    values in input order.
    """
    values: List[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
