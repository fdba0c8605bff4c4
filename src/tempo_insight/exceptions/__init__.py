"""Exception hierarchy for Tempo Insight."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    GitHistoryError,
)
from .base import TempoInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "TempoInsightError",
    "AnalysisError",
    "FileAccessError",
    "GitHistoryError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
