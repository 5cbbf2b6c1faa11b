"""Tests for scope/node.py."""

from __future__ import annotations

import gc

from scopeline.scope.models import Position, Range, SymbolDescriptor, SymbolKind
from scopeline.scope.node import GLOBAL_SCOPE_NAME, PLACEHOLDER, ScopeNode


def _node(name: str, kind: SymbolKind, start: int, end: int) -> ScopeNode:
    return ScopeNode(SymbolDescriptor(name, kind, Range.lines(start, end)))


def _sample_tree() -> tuple[ScopeNode, dict[str, ScopeNode]]:
    #  root
    #  ├── A (0-10)
    #  │   ├── f (1-4)
    #  │   └── g (5-9)
    #  │       └── inner (6-8)
    #  └── h (11-12)
    root = ScopeNode()
    nodes = {
        "A": _node("A", SymbolKind.CLASS, 0, 10),
        "f": _node("f", SymbolKind.METHOD, 1, 4),
        "g": _node("g", SymbolKind.METHOD, 5, 9),
        "inner": _node("inner", SymbolKind.FUNCTION, 6, 8),
        "h": _node("h", SymbolKind.FUNCTION, 11, 12),
    }
    root.add_child(nodes["A"])
    nodes["A"].add_child(nodes["f"])
    nodes["A"].add_child(nodes["g"])
    nodes["g"].add_child(nodes["inner"])
    root.add_child(nodes["h"])
    return root, nodes


class TestScopeNodeBasics:
    """Identity, naming and ranges."""

    def test_root_has_no_descriptor(self) -> None:
        root = ScopeNode()

        assert root.is_root
        assert root.parent is None
        assert root.kind is None
        assert root.name == GLOBAL_SCOPE_NAME
        assert root.qualified_name() == "Global Scope"

    def test_add_child_sets_parent(self) -> None:
        root, nodes = _sample_tree()

        assert nodes["A"].parent is root
        assert nodes["inner"].parent is nodes["g"]
        assert root.children == [nodes["A"], nodes["h"]]

    def test_qualified_name_joins_ancestors(self) -> None:
        _root, nodes = _sample_tree()

        assert nodes["A"].qualified_name() == "A"
        assert nodes["inner"].qualified_name() == "A.g.inner"
        assert nodes["h"].qualified_name() == "h"

    def test_depth(self) -> None:
        root, nodes = _sample_tree()

        assert root.depth == 0
        assert nodes["A"].depth == 0
        assert nodes["inner"].depth == 2

    def test_range_prefers_effective_range(self) -> None:
        node = _node("f", SymbolKind.FUNCTION, 3, 3)
        approximated = Range(Position(3, 0), Position(9, 0))

        assert node.range == Range.lines(3, 3)
        node.effective_range = approximated
        assert node.range == approximated

    def test_root_contains_every_position(self) -> None:
        root = ScopeNode()

        assert root.contains_position(Position(0, 0))
        assert root.contains_position(Position(10**9, 500))

    def test_contains_position_is_inclusive(self) -> None:
        node = _node("A", SymbolKind.CLASS, 2, 5)

        assert node.contains_position(Position(2, 0))
        assert node.contains_position(Position(5, 0))
        assert not node.contains_position(Position(5, 1))
        assert not node.contains_position(Position(1, 99))

    def test_contains_node_tests_end_position(self) -> None:
        outer = _node("A", SymbolKind.CLASS, 0, 10)
        same = _node("B", SymbolKind.CLASS, 0, 10)
        later = _node("C", SymbolKind.CLASS, 4, 12)

        assert outer.contains_node(same)
        assert not outer.contains_node(later)
        assert ScopeNode().contains_node(later)

    def test_siblings_include_self(self) -> None:
        root, nodes = _sample_tree()

        assert nodes["f"].siblings() == [nodes["f"], nodes["g"]]
        assert nodes["h"].siblings() == [nodes["A"], nodes["h"]]
        assert root.siblings() == root.children

    def test_node_keeps_ancestors_after_root_released(self) -> None:
        root, nodes = _sample_tree()
        inner = nodes["inner"]
        f = nodes["f"]

        del root, nodes
        gc.collect()

        assert inner.qualified_name() == "A.g.inner"
        assert inner.depth == 2
        assert inner.parent is not None and inner.parent.name == "g"
        assert [n.name for n in f.siblings()] == ["f", "g"]

    def test_placeholder_is_root_like(self) -> None:
        assert PLACEHOLDER.is_root
        assert PLACEHOLDER.children == []
        assert PLACEHOLDER.qualified_name() == GLOBAL_SCOPE_NAME

    def test_repr(self) -> None:
        _root, nodes = _sample_tree()

        assert repr(ScopeNode()) == "ScopeNode('Global Scope')"
        assert repr(nodes["f"]) == "ScopeNode('A.f', METHOD, 1:0-4:0)"


class TestScopeNodeIteration:
    """Traversal orders."""

    def test_preorder(self) -> None:
        root, _nodes = _sample_tree()

        assert [n.name for n in root.iter_preorder()] == [
            GLOBAL_SCOPE_NAME,
            "A",
            "f",
            "g",
            "inner",
            "h",
        ]

    def test_postorder_reversed_children(self) -> None:
        root, _nodes = _sample_tree()

        assert [n.name for n in root.iter_postorder_reversed()] == [
            "h",
            "inner",
            "g",
            "f",
            "A",
            GLOBAL_SCOPE_NAME,
        ]

    def test_iteration_is_repeatable(self) -> None:
        root, _nodes = _sample_tree()

        first = list(root.iter_postorder_reversed())
        second = list(root.iter_postorder_reversed())

        assert first == second

    def test_deep_tree_does_not_recurse(self) -> None:
        root = ScopeNode()
        parent = root
        for depth in range(5000):
            child = _node(f"f{depth}", SymbolKind.FUNCTION, depth, 10000 - depth)
            parent.add_child(child)
            parent = child

        assert sum(1 for _ in root.iter_preorder()) == 5001
        assert next(iter(root.iter_postorder_reversed())).name == "f4999"
