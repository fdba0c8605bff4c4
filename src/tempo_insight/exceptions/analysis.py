"""Analysis-related exceptions: file access and git history."""

from pathlib import Path

from .base import TempoInsightError


class AnalysisError(TempoInsightError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class GitHistoryError(AnalysisError):
    """Raised when git history cannot be read for a repository."""

    def __init__(self, repo_path: str, reason: str):
        super().__init__(
            f"Failed to read git log: {repo_path}",
            details={"repo": repo_path, "reason": reason},
        )
        self.repo_path = repo_path
        self.reason = reason
