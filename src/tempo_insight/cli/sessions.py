"""Sessions command: group commit history into work sessions."""

from typing import Optional

import click
import typer
from rich.markup import escape

from ..cache import session_key
from ..formatters import (
    SessionsJsonFormatter,
    SessionsMarkdownFormatter,
    SessionsRichFormatter,
)
from ..logging_config import get_logger
from ..temporal import GitExtractor, detect_sessions
from . import app
from ._common import console, guarded, open_cache, resolve_config, target_path

logger = get_logger(__name__)


@app.command()
def sessions(
    ctx: typer.Context,
    since: Optional[str] = typer.Option(
        None,
        "--since",
        help="Start of the window, any git date (default: '3 months ago')",
    ),
    until: Optional[str] = typer.Option(
        None,
        "--until",
        help="End of the window, any git date",
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Idle minutes that end a session (default: 90)",
    ),
    output_format: str = typer.Option(
        "terminal",
        "--format",
        "-f",
        help="Output format",
        click_type=click.Choice(["terminal", "json", "markdown"], case_sensitive=False),
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Only show the most recent N sessions",
        min=1,
    ),
    no_cache: bool = typer.Option(
        False,
        "--no-cache",
        help="Always re-read git history",
    ),
):
    """
    Detect work sessions from commit timestamps.

    Consecutive commits belong to the same session unless they are more
    than --threshold minutes apart.

    [bold cyan]Examples:[/bold cyan]

      tempo-insight sessions

      tempo-insight sessions --since "1 year ago" -t 60

      tempo-insight sessions -f markdown -l 20 > SESSIONS.md
    """
    verbose = bool((ctx.obj or {}).get("verbose"))

    with guarded(verbose):
        root = target_path(ctx)
        config = resolve_config(ctx, session_gap_minutes=threshold, session_since=since)

        extractor = GitExtractor(
            str(root),
            max_commits=config.git_max_commits,
            since=config.session_since,
            until=until,
        )
        if not extractor.is_git_repo():
            console.print(f"[red]Error:[/red] Not a git repository: {escape(str(root))}")
            raise typer.Exit(1)

        with open_cache(config, root, enabled=not no_cache) as cache:
            head = extractor.head_sha() if cache.enabled else None
            key = None
            result = None
            if head:
                key = session_key(
                    str(root),
                    head,
                    config.session_since,
                    until,
                    config.session_gap_minutes,
                    max_commits=config.git_max_commits,
                )
                result = cache.load(key)

            if result is None:
                commits = extractor.extract()
                if not commits:
                    console.print("[yellow]No commits found in the specified range.[/yellow]")
                    raise typer.Exit(0)
                result = detect_sessions(commits, config.session_gap_minutes)
                if key:
                    cache.store(key, result)
            else:
                logger.info("Using cached session analysis")

        fmt = output_format.lower()
        if fmt == "json":
            print(SessionsJsonFormatter(limit=limit).format(result))
        elif fmt == "markdown":
            print(SessionsMarkdownFormatter(limit=limit).format(result))
        else:
            SessionsRichFormatter(console=console, limit=limit).render(result)
