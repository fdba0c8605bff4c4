"""Cache management commands."""

import typer
from rich.markup import escape

from ..cache import CacheStats
from . import app
from ._common import cache_location, console, guarded, open_cache, resolve_config, target_path


@app.command()
def cache_info(ctx: typer.Context):
    """Show where session results are cached and how much is stored."""
    with guarded():
        config = resolve_config(ctx)
        directory = cache_location(config, target_path(ctx))
        if config.cache_enabled and not directory.exists():
            # nothing cached yet; opening the cache would create the directory
            stats = CacheStats(enabled=True, directory=str(directory))
        else:
            with open_cache(config, target_path(ctx)) as cache:
                stats = cache.stats()

    console.print("[bold cyan]Tempo Insight Cache[/bold cyan]")
    if not stats.enabled:
        console.print("Status: [red]Disabled[/red]")
        return

    console.print("Status: [green]Enabled[/green]")
    console.print(f"Directory: [blue]{escape(stats.directory or '')}[/blue]")
    if stats.error:
        console.print(f"[yellow]Could not read cache: {escape(stats.error)}[/yellow]")
        return
    console.print(f"Entries: [yellow]{stats.entries}[/yellow]")
    console.print(f"Size: [yellow]{stats.volume_bytes:,} bytes[/yellow]")
    console.print(f"TTL: {config.cache_ttl_hours}h")


@app.command()
def cache_clear(ctx: typer.Context):
    """Delete all cached session results for the repository."""
    with guarded():
        config = resolve_config(ctx)
        if not config.cache_enabled:
            console.print("[yellow]Cache is disabled[/yellow]")
            raise typer.Exit(0)

        removed = 0
        if cache_location(config, target_path(ctx)).exists():
            with open_cache(config, target_path(ctx)) as cache:
                removed = cache.clear()
    console.print(f"[green]Cache cleared[/green] ({removed} entries removed)")
