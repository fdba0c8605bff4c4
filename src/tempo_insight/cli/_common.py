"""Shared CLI helpers."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ..cache import SessionCache
from ..config import AnalysisConfig, load_config
from ..exceptions import TempoInsightError
from ..logging_config import get_logger, setup_logging

console = Console()

logger = get_logger(__name__)


def target_path(ctx: typer.Context) -> Path:
    """Repository root chosen with -C/--path, defaulting to the cwd."""
    obj = ctx.obj or {}
    return Path(obj.get("path") or Path.cwd()).resolve()


def resolve_config(ctx: typer.Context, **overrides) -> AnalysisConfig:
    """Build config from the global --config file plus command options.

    Logging is reconfigured from the resolved verbosity, so a config file or
    TEMPO_VERBOSITY takes effect as well as -v.
    """
    obj = ctx.obj or {}
    if obj.get("verbose"):
        overrides.setdefault("verbose", True)
    config = load_config(config_file=obj.get("config"), **overrides)
    setup_logging(verbose=config.verbosity == "verbose", quiet=config.verbosity == "quiet")
    return config


def cache_location(config: AnalysisConfig, root: Path) -> Path:
    """Cache directory inside the analyzed repository unless cache_dir is absolute."""
    cache_dir = Path(config.cache_dir)
    return cache_dir if cache_dir.is_absolute() else root / cache_dir


def open_cache(config: AnalysisConfig, root: Path, enabled: bool = True) -> SessionCache:
    return SessionCache(
        cache_location(config, root),
        ttl_hours=config.cache_ttl_hours,
        enabled=enabled and config.cache_enabled,
    )


@contextmanager
def guarded(verbose: bool = False) -> Iterator[None]:
    """Turn library errors into a printed message and an exit code."""
    try:
        yield
    except typer.Exit:
        raise
    except TempoInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
