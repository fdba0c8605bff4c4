"""CLI entry point, registers all subcommands."""

import typer

app = typer.Typer(
    name="tempo-insight",
    help="Tempo Insight - modularity scoring and work-session detection",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .modularity import modularity as _modularity  # noqa: F401, E402
from .sessions import sessions as _sessions  # noqa: F401, E402
from .cache import cache_info as _cache_info, cache_clear as _cache_clear  # noqa: F401, E402
