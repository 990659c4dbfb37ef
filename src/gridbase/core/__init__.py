"""Core gridbase utilities.

Configuration, structured logging and the engine's error types.
"""

from gridbase.core.config import Settings, get_settings
from gridbase.core.errors import (
    EngineError,
    ErrorCode,
    GridbaseError,
    InvalidInputError,
    NoGroupColumnError,
    NotFoundError,
    StoreError,
    StoreResult,
)
from gridbase.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "EngineError",
    "ErrorCode",
    "GridbaseError",
    "InvalidInputError",
    "LoggingContext",
    "NoGroupColumnError",
    "NotFoundError",
    "Settings",
    "StoreError",
    "StoreResult",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
