"""Pattern-aware modularity analysis: classification, scoring, aggregation."""

from .analyzer import analyze_file, analyze_modularity, summarize
from .models import (
    ExemptedFile,
    FileModularityResult,
    LargestFile,
    ModularityFlag,
    ModularityOptions,
    ModularityResult,
    ModularitySummary,
    Pattern,
    Rating,
    RatingDistribution,
    StructuralSignals,
)
from .patterns import PATTERN_RULES, classify
from .scoring import PATTERN_THRESHOLDS, extract_signals, score_file, thresholds_for

__all__ = [
    "Pattern",
    "Rating",
    "ModularityFlag",
    "StructuralSignals",
    "FileModularityResult",
    "ExemptedFile",
    "LargestFile",
    "RatingDistribution",
    "ModularitySummary",
    "ModularityOptions",
    "ModularityResult",
    "PATTERN_RULES",
    "PATTERN_THRESHOLDS",
    "classify",
    "extract_signals",
    "score_file",
    "thresholds_for",
    "analyze_file",
    "analyze_modularity",
    "summarize",
]
