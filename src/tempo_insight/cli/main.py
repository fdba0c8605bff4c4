"""Global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from ..logging_config import setup_logging
from . import app
from ._common import console


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Repository root to analyze (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Modularity scoring and work-session detection for a repository.

    [bold cyan]Examples:[/bold cyan]

      tempo-insight modularity

      tempo-insight -C /path/to/repo sessions --threshold 60

      tempo-insight modularity --pattern store --json
    """
    ctx.ensure_object(dict)
    ctx.obj["path"] = path if path else Path.cwd()
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose

    if version:
        from .. import __version__

        console.print(f"[bold cyan]Tempo Insight[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)

    setup_logging(verbose=verbose)
