"""Scope resolution control for a single document."""

from scopeline.resolution.controller import (
    ControllerState,
    ControllerStatus,
    ScopeResolutionController,
)

__all__ = ["ControllerState", "ControllerStatus", "ScopeResolutionController"]
