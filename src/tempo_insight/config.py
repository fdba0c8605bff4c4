"""Configuration loading and management for Tempo Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.tempo-insight.toml)
    3. Project config (./tempo-insight.toml)
    4. Explicit config file
    5. Environment variables (TEMPO_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(session_gap_minutes=60)
    >>> config.session_gap_minutes
    60
"""

from __future__ import annotations

import numbers
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Literal, Optional, Union, get_args, get_origin, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
DEFAULT_IGNORE_DIRS = ("node_modules", "dist", "coverage", ".git", ".tempo-cache")
DEFAULT_GAP_MINUTES = 90.0


def validate_gap_threshold(value: Any) -> float:
    """Reject gap thresholds that would silently yield one giant session.

    Returns the threshold as a float.

    Raises:
        InvalidConfigError: If value is not a positive number
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfigError("session_gap_minutes", value, "must be a number")
    if value != value or value <= 0:  # NaN or non-positive
        raise InvalidConfigError("session_gap_minutes", value, "must be greater than zero")
    return float(value)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a modularity or sessions run.

    Attributes:
        Modularity:
            min_lines: Files shorter than this are left out of the report
            source_extensions: File suffixes the scanner picks up
            ignore_dirs: Directory names never descended into
            workers: Thread pool size for scoring (None or 1 = sequential)
            follow_symlinks: Follow symbolic links during scanning

        Sessions:
            session_gap_minutes: Idle gap that closes a session
            session_since: Default ``git log --since`` window
            git_max_commits: Maximum commits to read (0 = unlimited)

        Caching:
            cache_enabled: Cache session detection output on disk
            cache_dir: Directory for cache storage
            cache_ttl_hours: Cache time-to-live in hours

        Output control:
            verbosity: Logging verbosity level
    """

    # Modularity
    min_lines: int = 100
    source_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS))
    ignore_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))
    workers: Optional[int] = None
    follow_symlinks: bool = False

    # Sessions
    session_gap_minutes: float = DEFAULT_GAP_MINUTES
    session_since: str = "3 months ago"
    git_max_commits: int = 0

    # Caching
    cache_enabled: bool = True
    cache_dir: str = ".tempo-cache"
    cache_ttl_hours: int = 24

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.min_lines < 0:
            raise InvalidConfigError("min_lines", self.min_lines, "must be non-negative")
        if not self.source_extensions:
            raise InvalidConfigError(
                "source_extensions", self.source_extensions, "must not be empty"
            )
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")

        validate_gap_threshold(self.session_gap_minutes)

        if self.git_max_commits < 0:
            raise InvalidConfigError(
                "git_max_commits", self.git_max_commits, "must be non-negative"
            )
        if self.cache_ttl_hours < 0:
            raise InvalidConfigError(
                "cache_ttl_hours", self.cache_ttl_hours, "must be non-negative"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be quiet, normal or verbose"
            )


ENV_PREFIX = "TEMPO_"
_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            merged value fails validation
    """
    merged: dict[str, Any] = {}
    for label, path in _config_files(config_file):
        merged.update(_read_config_file(label, path))
    merged.update(_env_overrides(os.environ))
    merged.update(_cli_overrides(overrides))

    try:
        return AnalysisConfig(**merged)
    except InvalidConfigError:
        raise
    except (TypeError, ValueError) as e:
        # Unknown key or wrong value type
        raise ConfigurationError(f"Invalid configuration: {e}")


def _config_files(explicit: Optional[Path]) -> list[tuple[str, Path]]:
    """(label, path) of every config file that applies, lowest priority first."""
    candidates = [
        ("global", Path.home() / ".tempo-insight.toml"),
        ("project", Path.cwd() / "tempo-insight.toml"),
    ]
    found = [(label, path) for label, path in candidates if path.exists()]
    if explicit is not None:
        if not explicit.exists():
            raise ConfigurationError(f"Config file not found: {explicit}")
        found.append(("explicit", explicit))
    return found


def _read_config_file(label: str, path: Path) -> dict[str, Any]:
    """Settings from a TOML file, top-level or under ``[tool.tempo-insight]``."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid {label} config '{path}': {e}")

    section = data.get("tool", {}).get("tempo-insight")
    return dict(section) if isinstance(section, dict) else data


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Typed values for every ``TEMPO_<FIELD>`` variable that is set.

    List fields (source_extensions, ignore_dirs) can only be set in files.
    """
    values: dict[str, Any] = {}
    for name, parse in _env_parsers().items():
        key = ENV_PREFIX + name.upper()
        raw = environ.get(key)
        if raw is None or parse is None:
            continue
        try:
            values[name] = parse(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {key}: {e}")
    return values


def _env_parsers() -> dict[str, Optional[Callable[[str], Any]]]:
    hints = get_type_hints(AnalysisConfig)
    parsers: dict[str, Optional[Callable[[str], Any]]] = {}
    for name in AnalysisConfig.__dataclass_fields__:
        hint = hints[name]
        if get_origin(hint) is Union:  # Optional[X]
            hint = next(a for a in get_args(hint) if a is not type(None))
        if get_origin(hint) is Literal:
            parsers[name] = str
        else:
            parsers[name] = _SCALAR_PARSERS.get(hint)
    return parsers


def _parse_bool(raw: str) -> bool:
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"expected true/false, got '{raw}'")


_SCALAR_PARSERS: dict[Any, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
    str: str,
}


def _cli_overrides(overrides: dict[str, Any]) -> dict[str, Any]:
    """Drop unset (None) options and fold ``verbose``/``quiet`` into ``verbosity``."""
    values = {
        k: v for k, v in overrides.items() if v is not None and k not in ("verbose", "quiet")
    }
    if overrides.get("quiet"):
        values["verbosity"] = "quiet"
    elif overrides.get("verbose"):
        values["verbosity"] = "verbose"
    return values
