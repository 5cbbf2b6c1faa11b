"""scopeline CLI."""

from pathlib import Path

import click

from scopeline.cli.resolve import members_command, resolve_command
from scopeline.cli.tree import tree_command
from scopeline.config.loader import load_config
from scopeline.core.errors import ConfigError
from scopeline.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="scopeline")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: .scopeline.yaml if present)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Scopeline - find the enclosing scope of a position from document symbols."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config
    if verbose:
        configure_logging(level="DEBUG")
    else:
        configure_logging(config=config.logging)


cli.add_command(resolve_command, name="resolve")
cli.add_command(members_command, name="members")
cli.add_command(tree_command, name="tree")


if __name__ == "__main__":
    cli()
