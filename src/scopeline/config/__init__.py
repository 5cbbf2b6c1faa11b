"""Config module exports."""

from scopeline.config.loader import load_config
from scopeline.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ResolutionConfig,
    ScopelineConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "ResolutionConfig",
    "ScopelineConfig",
]
