"""Scopeline error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Symbols
- 4xxx: Resolution
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Symbols (3xxx)
    SYMBOLS_INVALID_PAYLOAD = 3001
    SYMBOLS_INVALID_JSON = 3002

    # Resolution (4xxx)
    RESOLUTION_CANCELLED = 4001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ScopelineError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ScopelineError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class SymbolParseError(ScopelineError):
    """Symbol payload could not be interpreted at all.

    Individual malformed entries are skipped instead; this is raised only
    when the payload as a whole is unusable.
    """

    @classmethod
    def invalid_payload(cls, source: str, reason: str) -> "SymbolParseError":
        return cls(
            code=ErrorCode.SYMBOLS_INVALID_PAYLOAD,
            message=f"Invalid symbol payload from {source}: {reason}",
            details={"source": source, "reason": reason},
        )

    @classmethod
    def invalid_json(cls, path: str, reason: str) -> "SymbolParseError":
        return cls(
            code=ErrorCode.SYMBOLS_INVALID_JSON,
            message=f"Failed to parse symbol JSON at {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ResolutionCancelledError(ScopelineError):
    """A symbol refresh was superseded by a newer one.

    Observed only by callers awaiting the superseded refresh. Never a
    user-visible failure.
    """

    @classmethod
    def superseded(cls, document: str, generation: int, current: int) -> "ResolutionCancelledError":
        return cls(
            code=ErrorCode.RESOLUTION_CANCELLED,
            message=f"Symbol refresh {generation} for {document} superseded by {current}",
            retryable=True,
            details={"document": document, "generation": generation, "current": current},
        )


class InternalError(ScopelineError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
