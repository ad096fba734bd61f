"""Unit tests for Ok/Err results."""

from __future__ import annotations

import pytest

from avrowire.result import DecodeFailure, DecodeFailureReason, Err, Ok, sequence


class TestOk:
    """Test the Ok variant."""

    def test_accessors(self) -> None:
        result = Ok(3)

        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 3
        assert result.unwrap_or(0) == 3

    def test_map_and_then(self) -> None:
        """Test map wraps, and_then does not."""
        assert Ok(3).map(lambda n: n * 2) == Ok(6)
        assert Ok(3).and_then(lambda n: Ok(n + 1)) == Ok(4)
        assert Ok(3).and_then(lambda n: Err("bad")) == Err("bad")


class TestErr:
    """Test the Err variant."""

    def test_accessors(self) -> None:
        result = Err("boom")

        assert result.is_err()
        assert not result.is_ok()
        assert result.unwrap_or(7) == 7

    def test_unwrap_raises(self) -> None:
        """Test unwrap on Err raises ValueError with the error text."""
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_map_is_noop(self) -> None:
        """Test Err passes through map and and_then untouched."""
        error = Err("boom")

        assert error.map(lambda n: n * 2) is error
        assert error.and_then(lambda n: Ok(n)) is error


class TestSequence:
    """Test collecting results."""

    def test_all_ok_keeps_order(self) -> None:
        assert sequence([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])

    def test_empty(self) -> None:
        assert sequence([]) == Ok([])

    def test_stops_at_first_error(self) -> None:
        """Test the first Err is returned and later items are not consumed."""
        consumed = []

        def results():
            for item in [Ok(1), Err("first"), Err("second"), Ok(4)]:
                consumed.append(item)
                yield item

        assert sequence(results()) == Err("first")
        assert len(consumed) == 2


class TestDecodeFailure:
    """Test the DecodeFailure value."""

    def test_str(self) -> None:
        failure = DecodeFailure(DecodeFailureReason.MISSING_FIELD, "User validation failed")

        assert str(failure) == "missing_field: User validation failed"
        assert failure.errors == ()
