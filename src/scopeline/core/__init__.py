"""Core module exports."""

from scopeline.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ResolutionCancelledError,
    ScopelineError,
    SymbolParseError,
)
from scopeline.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ResolutionCancelledError",
    "ScopelineError",
    "SymbolParseError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
