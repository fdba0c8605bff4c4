"""Modularity command: pattern-aware file size and structure scoring."""

from typing import List, Optional

import typer

from ..formatters import ModularityJsonFormatter, ModularityRichFormatter
from ..modularity import ModularityOptions, Pattern, analyze_modularity
from . import app
from ._common import console, guarded, resolve_config, target_path


@app.command()
def modularity(
    ctx: typer.Context,
    include_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Score every file regardless of size",
    ),
    min_lines: Optional[int] = typer.Option(
        None,
        "--min-lines",
        "-m",
        help="Skip files shorter than this (default: 100)",
        min=0,
    ),
    pattern: Optional[List[Pattern]] = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Only report files of this pattern (repeatable)",
        case_sensitive=False,
    ),
    top: int = typer.Option(
        10,
        "--top",
        "-n",
        help="Number of files needing attention to list",
        min=1,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output machine-readable JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show signals, largest files and exempted count",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers for file analysis",
        min=1,
        max=32,
    ),
):
    """
    Score how well each source file is organized for its size.

    Files are classified by role (store, routes, component, ...) and judged
    against size thresholds for that role, then adjusted by structural
    signals such as sections, coupling and export count.

    [bold cyan]Examples:[/bold cyan]

      tempo-insight modularity

      tempo-insight modularity --all --verbose

      tempo-insight modularity -p store -p routes --json
    """
    show_details = verbose or bool((ctx.obj or {}).get("verbose"))

    with guarded(show_details):
        root = target_path(ctx)
        config = resolve_config(ctx, min_lines=min_lines, workers=workers)
        options = ModularityOptions(
            min_lines=config.min_lines,
            include_all=include_all,
            patterns=frozenset(pattern) if pattern else None,
            workers=config.workers,
        )

        if not json_output:
            with console.status("[cyan]Scoring files...[/cyan]"):
                result = analyze_modularity(root, options=options, config=config)
        else:
            result = analyze_modularity(root, options=options, config=config)

        if json_output:
            print(ModularityJsonFormatter().format(result))
        else:
            ModularityRichFormatter(console=console, verbose=show_details, top=top).render(result)
