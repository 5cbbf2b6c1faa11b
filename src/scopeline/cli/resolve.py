"""scopeline resolve / members commands - scope lookup at a position."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scopeline.cli.utils import get_config, resolve_once
from scopeline.scope.models import Position
from scopeline.scope.node import PLACEHOLDER, ScopeNode

_symbols_argument = click.argument(
    "symbols", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
_line_option = click.option("--line", "-l", type=click.IntRange(min=0), required=True, help="Zero-based line")
_character_option = click.option(
    "--character", "-c", type=click.IntRange(min=0), default=0, show_default=True, help="Zero-based column"
)


def _describe(node: ScopeNode) -> dict[str, object]:
    if node.is_root:
        return {"name": node.name, "kind": None, "range": None, "qualified_name": node.qualified_name()}
    symbol_range = node.range
    return {
        "name": node.name,
        "kind": node.kind.name.lower() if node.kind is not None else None,
        "range": {
            "start": {"line": symbol_range.start.line, "character": symbol_range.start.character},
            "end": {"line": symbol_range.end.line, "character": symbol_range.end.character},
        },
        "qualified_name": node.qualified_name(),
    }


@click.command()
@_symbols_argument
@_line_option
@_character_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def resolve_command(
    ctx: click.Context, symbols: Path, line: int, character: int, as_json: bool
) -> None:
    """Print the innermost scope at a position.

    SYMBOLS is a saved textDocument/documentSymbol response (JSON).
    """
    _root, node = resolve_once(symbols, Position(line, character), get_config(ctx))
    if node is None:
        node = PLACEHOLDER

    if as_json:
        click.echo(json.dumps(_describe(node)))
    else:
        click.echo(node.qualified_name())


@click.command()
@_symbols_argument
@_line_option
@_character_option
@click.pass_context
def members_command(ctx: click.Context, symbols: Path, line: int, character: int) -> None:
    """List the scopes alongside the one at a position.

    SYMBOLS is a saved textDocument/documentSymbol response (JSON).
    """
    console = Console()
    _root, node = resolve_once(symbols, Position(line, character), get_config(ctx))
    if node is None:
        console.print("[yellow]No symbols available[/yellow] - provider returned nothing")
        return

    parent = node.parent
    title = parent.qualified_name() if parent is not None else node.qualified_name()
    table = Table(title=escape(title), show_header=True, header_style="bold")
    table.add_column("", width=1)
    table.add_column("Scope")
    table.add_column("Kind")
    table.add_column("Lines", justify="right")

    for sibling in node.siblings():
        marker = "[green]›[/green]" if sibling is node else ""
        symbol_range = sibling.range
        table.add_row(
            marker,
            escape(sibling.name),
            sibling.kind.name.lower() if sibling.kind is not None else "",
            f"{symbol_range.start.line}-{symbol_range.end.line}",
        )
    console.print(table)
