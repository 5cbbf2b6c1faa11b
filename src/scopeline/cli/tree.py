"""scopeline tree command - show the scope hierarchy."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from scopeline.cli.utils import get_config, resolve_once
from scopeline.scope.models import Position
from scopeline.scope.node import ScopeNode


def render_tree(root: ScopeNode) -> Tree:
    """Build a rich Tree mirroring the scope tree below ``root``."""
    tree = Tree(f"[bold]{escape(root.name)}[/bold]")
    stack: list[tuple[ScopeNode, Tree]] = [(root, tree)]
    while stack:
        node, branch = stack.pop()
        for child in node.children:
            kind = child.kind.name.lower() if child.kind is not None else ""
            label = f"{escape(child.name)} [dim]{kind} {child.range}[/dim]"
            stack.append((child, branch.add(label)))
    return tree


@click.command()
@click.argument("symbols", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def tree_command(ctx: click.Context, symbols: Path) -> None:
    """Print the scope tree built from a symbol file.

    SYMBOLS is a saved textDocument/documentSymbol response (JSON).
    """
    console = Console()
    root, _node = resolve_once(symbols, Position(0, 0), get_config(ctx))
    if root is None:
        console.print("[yellow]No symbols available[/yellow] - provider returned nothing")
        return
    console.print(render_tree(root))
