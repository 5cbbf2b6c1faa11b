"""Tests for scope/models.py: positions, ranges and descriptors."""

from __future__ import annotations

import pytest

from scopeline.scope.models import SCOPE_KINDS, Position, Range, SymbolDescriptor, SymbolKind


class TestPosition:
    """Position ordering."""

    def test_orders_by_line_then_character(self) -> None:
        assert Position(1, 9) < Position(2, 0)
        assert Position(2, 1) > Position(2, 0)
        assert Position(3, 4) == Position(3, 4)

    def test_str(self) -> None:
        assert str(Position(4, 2)) == "4:2"


class TestRange:
    """Range containment."""

    @pytest.mark.parametrize(
        ("position", "expected"),
        [
            (Position(2, 4), True),  # start boundary
            (Position(5, 1), True),  # end boundary
            (Position(3, 0), True),
            (Position(2, 3), False),
            (Position(5, 2), False),
            (Position(0, 0), False),
        ],
    )
    def test_contains_is_inclusive(self, position: Position, expected: bool) -> None:
        symbol_range = Range(Position(2, 4), Position(5, 1))

        assert symbol_range.contains(position) is expected

    def test_inverted_range_behaves_like_its_start(self) -> None:
        inverted = Range(Position(4, 2), Position(1, 0))

        assert inverted.contains(Position(4, 2))
        assert not inverted.contains(Position(3, 0))
        assert inverted.normalized_end == Position(4, 2)
        assert not inverted.spans_multiple_lines

    def test_contains_range_includes_equal_range(self) -> None:
        outer = Range.lines(0, 10)

        assert outer.contains_range(Range.lines(0, 10))
        assert outer.contains_range(Range.lines(2, 5))
        assert not outer.contains_range(Range.lines(2, 11))

    def test_spans_multiple_lines(self) -> None:
        assert Range.lines(0, 1).spans_multiple_lines
        assert not Range(Position(3, 0), Position(3, 40)).spans_multiple_lines

    def test_point(self) -> None:
        point = Range.point(7, 3)

        assert point.start == point.end == Position(7, 3)


class TestSymbolDescriptor:
    """Descriptor helpers."""

    def test_scope_kinds(self) -> None:
        assert SCOPE_KINDS == {
            SymbolKind.MODULE,
            SymbolKind.NAMESPACE,
            SymbolKind.CLASS,
            SymbolKind.METHOD,
            SymbolKind.CONSTRUCTOR,
            SymbolKind.FUNCTION,
        }

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (SymbolKind.CLASS, True),
            (SymbolKind.FUNCTION, True),
            (SymbolKind.VARIABLE, False),
            (SymbolKind.PROPERTY, False),
        ],
    )
    def test_is_scope(self, kind: SymbolKind, expected: bool) -> None:
        assert SymbolDescriptor("x", kind, Range.point(0)).is_scope is expected

    def test_walk_is_preorder(self) -> None:
        leaf_a = SymbolDescriptor("a", SymbolKind.METHOD, Range.lines(1, 2))
        leaf_b = SymbolDescriptor("b", SymbolKind.METHOD, Range.lines(3, 4))
        inner = SymbolDescriptor("Inner", SymbolKind.CLASS, Range.lines(1, 4), (leaf_a, leaf_b))
        outer = SymbolDescriptor("Outer", SymbolKind.CLASS, Range.lines(0, 5), (inner,))

        assert [d.name for d in outer.walk()] == ["Outer", "Inner", "a", "b"]
