"""
Tempo Insight - modularity scoring and work-session detection

Scores source files against size thresholds tuned to their architectural
role, and groups git commit history into work sessions separated by idle
gaps.
"""

__version__ = "0.1.0"

from .config import AnalysisConfig, load_config
from .modularity import analyze_modularity, classify, extract_signals, score_file
from .temporal import detect_sessions

__all__ = [
    "analyze_modularity",  # Repository modularity report
    "detect_sessions",  # Commit history -> work sessions
    "classify",
    "extract_signals",
    "score_file",
    "AnalysisConfig",
    "load_config",
]
