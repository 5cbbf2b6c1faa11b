"""Point queries against a built scope tree."""

from __future__ import annotations

from scopeline.scope.models import Position
from scopeline.scope.node import ScopeNode


def resolve_position(root: ScopeNode, position: Position) -> ScopeNode | None:
    """Return the innermost scope containing ``position``.

    Nodes are tested deepest-first with later siblings before earlier
    ones, so a child always wins over its ancestors and, where approximated
    ranges touch, the later scope wins the shared boundary. The root matches
    any position, so ``None`` is only returned for a root that is not
    root-like and does not contain the position.
    """
    for node in root.iter_postorder_reversed():
        if node.contains_position(position):
            return node
    return None
