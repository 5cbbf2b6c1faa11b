"""Scope tree construction from provider symbol lists.

Three input shapes are handled:

- Pre-nested descriptors with proper (multi-line) ranges: the declared
  nesting is mirrored as is.
- Flat descriptors with proper ranges: each symbol is attached to the
  closest preceding scope whose range holds the symbol's end position.
- Any descriptors whose ranges are all degenerate (name token only):
  nesting comes from a kind-based heuristic and body ranges are
  approximated from where the next sibling starts.

The builder never fails on malformed input; it falls back to the heuristic
path and produces best-effort nesting.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import structlog

from scopeline.scope.models import Position, Range, SymbolDescriptor, SymbolKind
from scopeline.scope.node import DOCUMENT_RANGE, ScopeNode

logger = structlog.get_logger()

_CLASS_MEMBER_KINDS = frozenset({SymbolKind.METHOD, SymbolKind.CONSTRUCTOR})
_MODULE_MEMBER_KINDS = frozenset({SymbolKind.FUNCTION, SymbolKind.METHOD, SymbolKind.CONSTRUCTOR})


def build_scope_tree(symbols: Sequence[SymbolDescriptor]) -> ScopeNode:
    """Build a rooted scope tree from a provider's symbol list.

    Non-scope descriptors are ignored; scopes nested below one are kept
    and attached to the closest kept ancestor.

    Args:
        symbols: Descriptors in provider order, flat or pre-nested.

    Returns:
        The synthetic root. Every other node is a descendant of it.
    """
    root = ScopeNode()
    proper = has_proper_ranges(symbols)
    nested = any(sym.children for sym in symbols)

    if not proper:
        _nest_by_kind(root, _flatten_scopes(symbols))
        approximate_ranges(root)
    elif nested:
        _mirror_nesting(root, symbols)
    else:
        _nest_by_range(root, _flatten_scopes(symbols))

    logger.debug(
        "scope_tree_built",
        node_count=sum(1 for _ in root.iter_preorder()) - 1,
        proper=proper,
        nested=nested,
    )
    return root


def has_proper_ranges(symbols: Iterable[SymbolDescriptor]) -> bool:
    """True when at least one symbol's range spans more than one line."""
    return any(
        descriptor.range.spans_multiple_lines
        for symbol in symbols
        for descriptor in symbol.walk()
    )


def heuristic_contains(parent: ScopeNode, descriptor: SymbolDescriptor) -> bool:
    """Kind-based containment used when ranges cannot be trusted.

    Only one level of class or module membership is recognised; nested
    classes and functions inside functions end up as siblings.

    A class never holds a Function. Providers report module-level
    functions as Function and class members as Method, so with only the
    previous symbol to go on, a Function after a class is a top-level
    definition (``def global_func`` after ``class A`` must stay at
    document scope).
    """
    if parent.descriptor is None:
        return True
    match parent.descriptor.kind:
        case SymbolKind.NAMESPACE:
            return descriptor.kind != SymbolKind.NAMESPACE
        case SymbolKind.CLASS:
            return descriptor.kind in _CLASS_MEMBER_KINDS
        case SymbolKind.MODULE:
            return descriptor.kind in _MODULE_MEMBER_KINDS
        case _:
            return False


def approximate_ranges(root: ScopeNode) -> None:
    """Give every node a body range reaching to its next sibling.

    Each child starts at column 0 of its own line and ends where the next
    sibling starts, or where its parent ends for the last child. Children
    therefore tile their parent's span without gaps.
    """
    root.effective_range = DOCUMENT_RANGE
    stack: list[ScopeNode] = [root]
    while stack:
        parent = stack.pop()
        parent_end = parent.range.end
        starts = [Position(child.descriptor.range.start.line, 0) for child in parent.children]
        for index, child in enumerate(parent.children):
            end = starts[index + 1] if index + 1 < len(starts) else parent_end
            child.effective_range = Range(starts[index], max(end, starts[index]))
            stack.append(child)


def _flatten_scopes(symbols: Iterable[SymbolDescriptor]) -> Iterator[SymbolDescriptor]:
    for symbol in symbols:
        for descriptor in symbol.walk():
            if descriptor.is_scope:
                yield descriptor


def _mirror_nesting(parent: ScopeNode, symbols: Iterable[SymbolDescriptor]) -> None:
    for symbol in symbols:
        if symbol.is_scope:
            node = ScopeNode(symbol)
            parent.add_child(node)
            _mirror_nesting(node, symbol.children)
        else:
            # Hoist scopes declared inside a non-scope symbol
            _mirror_nesting(parent, symbol.children)


def _nest_by_range(root: ScopeNode, descriptors: Iterable[SymbolDescriptor]) -> None:
    # Outer scopes first when two start at the same position
    ordered = sorted(
        descriptors,
        key=lambda d: (d.range.start, _negated(d.range.normalized_end)),
    )
    last = root
    for descriptor in ordered:
        node = ScopeNode(descriptor)
        candidate: ScopeNode | None = last
        while candidate is not None:
            if candidate.contains_node(node):
                candidate.add_child(node)
                break
            candidate = candidate.parent
        last = node


def _nest_by_kind(root: ScopeNode, descriptors: Iterable[SymbolDescriptor]) -> None:
    ordered = sorted(descriptors, key=lambda d: d.range.start)
    last = root
    for descriptor in ordered:
        candidate: ScopeNode | None = last
        while candidate is not None:
            if heuristic_contains(candidate, descriptor):
                node = ScopeNode(descriptor)
                candidate.add_child(node)
                last = node
                break
            candidate = candidate.parent


def _negated(position: Position) -> tuple[int, int]:
    return (-position.line, -position.character)
