"""Symbol metadata consumed by the scope tree builder.

Positions are zero-based (line, character) pairs, the same convention the
Language Server Protocol uses. Descriptors are immutable; the builder never
modifies them, it only wraps them in ScopeNode instances.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum


class SymbolKind(IntEnum):
    """Symbol kinds, numbered as in the Language Server Protocol."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


# Kinds that open a lexical scope. Everything else is ignored by the builder.
SCOPE_KINDS: frozenset[SymbolKind] = frozenset(
    {
        SymbolKind.MODULE,
        SymbolKind.NAMESPACE,
        SymbolKind.CLASS,
        SymbolKind.METHOD,
        SymbolKind.CONSTRUCTOR,
        SymbolKind.FUNCTION,
    }
)


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based position in a document."""

    line: int
    character: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.character}"


@dataclass(frozen=True, slots=True)
class Range:
    """Span between two positions, inclusive on both ends.

    An inverted range (end before start) is treated as the single position
    at its start.
    """

    start: Position
    end: Position

    @classmethod
    def point(cls, line: int, character: int = 0) -> Range:
        pos = Position(line, character)
        return cls(pos, pos)

    @classmethod
    def lines(cls, start_line: int, end_line: int, end_character: int = 0) -> Range:
        return cls(Position(start_line, 0), Position(end_line, end_character))

    @property
    def normalized_end(self) -> Position:
        return self.end if self.end >= self.start else self.start

    @property
    def spans_multiple_lines(self) -> bool:
        return self.end.line > self.start.line

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.normalized_end

    def contains_range(self, other: Range) -> bool:
        return self.contains(other.start) and self.contains(other.normalized_end)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class SymbolDescriptor:
    """One symbol reported by a code-intelligence provider.

    ``children`` is only populated by providers that report nested symbols
    (LSP ``DocumentSymbol``); flat providers leave it empty.
    """

    name: str
    kind: SymbolKind
    range: Range
    children: tuple[SymbolDescriptor, ...] = ()
    detail: str | None = None
    container_name: str | None = None

    @property
    def is_scope(self) -> bool:
        return self.kind in SCOPE_KINDS

    def walk(self) -> Iterator[SymbolDescriptor]:
        """Yield this descriptor and all nested descriptors in preorder."""
        stack: list[SymbolDescriptor] = [self]
        while stack:
            descriptor = stack.pop()
            yield descriptor
            stack.extend(reversed(descriptor.children))
