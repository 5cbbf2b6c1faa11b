"""CLI utilities."""

import asyncio
from pathlib import Path

import click

from scopeline.config.models import ScopelineConfig
from scopeline.core.errors import ScopelineError
from scopeline.core.logging import get_log_file_path, get_logger
from scopeline.resolution.controller import ScopeResolutionController
from scopeline.scope.models import Position
from scopeline.scope.node import ScopeNode
from scopeline.symbols.provider import SymbolFileProvider


def get_config(ctx: click.Context) -> ScopelineConfig:
    obj = ctx.find_object(dict)
    if obj is None or "config" not in obj:
        return ScopelineConfig()
    return obj["config"]


def _resolve_failed(document: str, message: str) -> click.ClickException:
    """Log a failed resolution and build the error shown to the user.

    Points at the log file when one is configured.
    """
    get_logger("cli").error("resolve_failed", document=document, error=message)
    log_file = get_log_file_path()
    if log_file:
        return click.ClickException(f"{message}. See {log_file} for details.")
    return click.ClickException(message)


def resolve_once(
    symbols_path: Path,
    position: Position,
    config: ScopelineConfig,
) -> tuple[ScopeNode | None, ScopeNode | None]:
    """Run one resolution against a saved symbol file.

    Returns the tree root alongside the resolved node.

    Raises:
        click.ClickException: If the symbol file cannot be interpreted.
    """
    document = str(symbols_path)
    controller = ScopeResolutionController(
        document=document,
        provider=SymbolFileProvider(symbols_path),
        config=config.resolution,
    )
    try:
        node = asyncio.run(controller.resolve(position))
    except ScopelineError as e:
        raise _resolve_failed(document, str(e)) from e
    # The controller absorbs provider failures; a one-shot run reports them
    if node is None and controller.status.last_error is not None:
        raise _resolve_failed(document, controller.status.last_error)
    return controller.tree, node
