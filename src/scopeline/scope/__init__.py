"""Scope tree construction and position resolution."""

from scopeline.scope.builder import (
    approximate_ranges,
    build_scope_tree,
    has_proper_ranges,
    heuristic_contains,
)
from scopeline.scope.models import SCOPE_KINDS, Position, Range, SymbolDescriptor, SymbolKind
from scopeline.scope.node import GLOBAL_SCOPE_NAME, PLACEHOLDER, ScopeNode
from scopeline.scope.resolver import resolve_position

__all__ = [
    "GLOBAL_SCOPE_NAME",
    "PLACEHOLDER",
    "SCOPE_KINDS",
    "Position",
    "Range",
    "ScopeNode",
    "SymbolDescriptor",
    "SymbolKind",
    "approximate_ranges",
    "build_scope_tree",
    "has_proper_ranges",
    "heuristic_contains",
    "resolve_position",
]
