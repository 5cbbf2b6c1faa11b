"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SCOPELINE__SECTION__KEY)
3. YAML config file (.scopeline.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    SCOPELINE__<SECTION>__<KEY>=<VALUE>

Examples:
    SCOPELINE__LOGGING__LEVEL=DEBUG
    SCOPELINE__RESOLUTION__DEBOUNCE_SEC=0.1
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SCOPELINE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every refresh and resolution.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ResolutionConfig(BaseModel):
    """Scope resolution timing.

    Env vars:
        SCOPELINE__RESOLUTION__DEBOUNCE_SEC: Delay before a queued position is resolved
        SCOPELINE__RESOLUTION__RETRY_DELAY_SEC: Delay before retrying an empty resolution
    """

    debounce_sec: float = Field(
        default=0.05,
        description="Coalescing window for rapid cursor movement. "
        "Only the last position queued within the window is resolved.",
    )
    retry_delay_sec: float = Field(
        default=1.0,
        description="Delay before retrying when the symbol provider returned nothing. "
        "Lower values poll a warming-up provider harder.",
    )

    @field_validator("debounce_sec")
    @classmethod
    def validate_debounce(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"debounce_sec must be >= 0, got {v}")
        return v

    @field_validator("retry_delay_sec")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"retry_delay_sec must be > 0, got {v}")
        return v


class ScopelineConfig(BaseModel):
    """Root configuration for scopeline.

    All settings can be configured via:
    1. Environment variables: SCOPELINE__SECTION__KEY
    2. A YAML config file
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
