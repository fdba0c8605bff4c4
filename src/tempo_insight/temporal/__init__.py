"""Temporal analysis: git history and work sessions."""

from .git_extractor import GitExtractor
from .models import Commit, Session, SessionDetectionResult, SessionStats
from .sessions import compute_stats, detect_sessions

__all__ = [
    "Commit",
    "Session",
    "SessionStats",
    "SessionDetectionResult",
    "GitExtractor",
    "detect_sessions",
    "compute_stats",
]
