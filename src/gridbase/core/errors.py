"""Error kinds and write results for the table engine.

Store writes report failure through ``StoreResult`` instead of raising, so
callers can decide whether to fold a mutation into cached state. Code that
prefers exceptions calls ``StoreResult.unwrap()``, which raises the
``GridbaseError`` subclass matching the error code.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Error kinds surfaced by the engine."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    STORE_ERROR = "STORE_ERROR"
    NO_GROUP_COLUMN = "NO_GROUP_COLUMN"


@dataclass
class EngineError:
    """A single engine error.

    Attributes:
        code: Machine-readable error kind.
        message: Human-readable message.
        details: Optional structured context (ids, field errors).
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "message": self.message, "details": self.details}


class GridbaseError(Exception):
    """Base class for all engine exceptions."""

    code: ErrorCode = ErrorCode.STORE_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def error(self) -> EngineError:
        return EngineError(code=self.code, message=self.message, details=self.details)


class NotFoundError(GridbaseError):
    """Raised when a table, column or row does not exist."""

    code = ErrorCode.NOT_FOUND


class InvalidInputError(GridbaseError):
    """Raised when a mutation's input is malformed."""

    code = ErrorCode.VALIDATION_ERROR


class StoreError(GridbaseError):
    """Raised when the backing store rejects or fails a write."""

    code = ErrorCode.STORE_ERROR


class NoGroupColumnError(GridbaseError):
    """Raised when board grouping has no eligible select column."""

    code = ErrorCode.NO_GROUP_COLUMN


_EXCEPTIONS: dict[ErrorCode, type[GridbaseError]] = {
    ErrorCode.NOT_FOUND: NotFoundError,
    ErrorCode.VALIDATION_ERROR: InvalidInputError,
    ErrorCode.STORE_ERROR: StoreError,
    ErrorCode.NO_GROUP_COLUMN: NoGroupColumnError,
}


def exception_for(error: EngineError) -> GridbaseError:
    """Build the exception matching an error's code."""
    return _EXCEPTIONS[error.code](error.message, error.details)


@dataclass
class StoreResult(Generic[T]):
    """Outcome of a store write or session mutation.

    Attributes:
        ok: Whether the operation succeeded.
        value: The produced value on success.
        error: The error on failure.
    """

    ok: bool
    value: T | None = None
    error: EngineError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "StoreResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "StoreResult[T]":
        return cls(ok=False, error=EngineError(code=code, message=message, details=details or {}))

    @classmethod
    def from_error(cls, error: EngineError) -> "StoreResult[T]":
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return the value or raise the matching ``GridbaseError``."""
        if not self.ok:
            assert self.error is not None
            raise exception_for(self.error)
        return self.value  # type: ignore[return-value]
