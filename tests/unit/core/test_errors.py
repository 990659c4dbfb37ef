"""Unit tests for engine error types and StoreResult."""

import pytest

from gridbase.core.errors import (
    EngineError,
    ErrorCode,
    InvalidInputError,
    NoGroupColumnError,
    NotFoundError,
    StoreError,
    StoreResult,
    exception_for,
)


def test_success_unwraps_value():
    assert StoreResult.success(5).unwrap() == 5


def test_failure_carries_error():
    result = StoreResult.failure(ErrorCode.NOT_FOUND, "Row 'r1' not found", {"row_id": "r1"})
    assert result.ok is False
    assert result.error.to_dict() == {
        "code": "NOT_FOUND",
        "message": "Row 'r1' not found",
        "details": {"row_id": "r1"},
    }


@pytest.mark.parametrize(
    "code, exc_type",
    [
        (ErrorCode.NOT_FOUND, NotFoundError),
        (ErrorCode.VALIDATION_ERROR, InvalidInputError),
        (ErrorCode.STORE_ERROR, StoreError),
        (ErrorCode.NO_GROUP_COLUMN, NoGroupColumnError),
    ],
)
def test_unwrap_raises_matching_exception(code, exc_type):
    result = StoreResult.failure(code, "boom")
    with pytest.raises(exc_type) as exc_info:
        result.unwrap()
    assert exc_info.value.error.code == code


def test_exception_round_trips_error():
    error = EngineError(code=ErrorCode.STORE_ERROR, message="disk full", details={"op": "x"})
    exc = exception_for(error)
    assert exc.error == error
    assert StoreResult.from_error(exc.error).error == error
