"""Scope tree nodes.

A tree is owned top-down through `children`. Each node also keeps a plain
reference to its parent so a node handed out on its own still reports its
full ancestor chain; the cycle is left to the garbage collector.
"""

from __future__ import annotations

from collections.abc import Iterator

from scopeline.scope.models import Position, Range, SymbolDescriptor, SymbolKind

GLOBAL_SCOPE_NAME = "Global Scope"

# Line used as the end of the whole document when no real end is known
DOCUMENT_END_LINE = 2**31 - 1
DOCUMENT_RANGE = Range(Position(0, 0), Position(DOCUMENT_END_LINE, 0))


class ScopeNode:
    """One lexical scope, or the synthetic root when ``descriptor`` is None."""

    __slots__ = ("descriptor", "children", "effective_range", "_parent")

    def __init__(self, descriptor: SymbolDescriptor | None = None) -> None:
        self.descriptor = descriptor
        self.children: list[ScopeNode] = []
        # Set by the builder only when ranges had to be approximated
        self.effective_range: Range | None = None
        self._parent: ScopeNode | None = None

    @property
    def is_root(self) -> bool:
        return self.descriptor is None

    @property
    def parent(self) -> ScopeNode | None:
        return self._parent

    @property
    def name(self) -> str:
        if self.descriptor is None:
            return GLOBAL_SCOPE_NAME
        return self.descriptor.name

    @property
    def kind(self) -> SymbolKind | None:
        if self.descriptor is None:
            return None
        return self.descriptor.kind

    @property
    def range(self) -> Range:
        if self.effective_range is not None:
            return self.effective_range
        if self.descriptor is None:
            return DOCUMENT_RANGE
        return self.descriptor.range

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None and not node.is_root:
            depth += 1
            node = node.parent
        return depth

    def add_child(self, node: ScopeNode) -> None:
        self.children.append(node)
        node._parent = self

    def contains_position(self, position: Position) -> bool:
        if self.is_root:
            return True
        return self.range.contains(position)

    def contains_node(self, node: ScopeNode) -> bool:
        """Nesting test used while building: does this scope hold ``node``'s end?"""
        if self.is_root:
            return True
        return self.range.contains(node.range.normalized_end)

    def qualified_name(self) -> str:
        """Dot-joined names from the outermost scope down to this one."""
        if self.is_root:
            return GLOBAL_SCOPE_NAME
        names: list[str] = []
        node: ScopeNode | None = self
        while node is not None and not node.is_root:
            names.append(node.name)
            node = node.parent
        return ".".join(reversed(names))

    def siblings(self) -> list[ScopeNode]:
        """Scopes sharing this node's parent, this node included."""
        parent = self.parent
        if parent is None:
            return list(self.children)
        return list(parent.children)

    def iter_preorder(self) -> Iterator[ScopeNode]:
        """Yield this node, then every descendant depth-first."""
        stack: list[ScopeNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_postorder_reversed(self) -> Iterator[ScopeNode]:
        """Yield descendants deepest-first, last child first, this node last.

        Every node comes after all of its descendants and before any of its
        earlier siblings, so the first match in this order is the innermost
        and latest scope.
        """
        stack: list[tuple[ScopeNode, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                yield node
                continue
            stack.append((node, True))
            # Pushed in order so the last child is popped first
            stack.extend((child, False) for child in node.children)

    def __repr__(self) -> str:
        if self.is_root:
            return f"ScopeNode({GLOBAL_SCOPE_NAME!r})"
        return f"ScopeNode({self.qualified_name()!r}, {self.kind.name}, {self.range})"


# Stand-in returned while no real resolution is available. Never part of a tree.
PLACEHOLDER = ScopeNode()
