"""Data models for commit history and work sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def to_datetime(timestamp: int) -> datetime:
    """Unix seconds to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


@dataclass(frozen=True)
class Commit:
    hash: str
    timestamp: int  # unix seconds, author time
    author: str = ""
    subject: str = ""
    files: list[str] = field(default_factory=list)  # empty unless requested

    @property
    def date(self) -> datetime:
        return to_datetime(self.timestamp)


@dataclass(frozen=True)
class Session:
    """A contiguous run of commits with no idle gap above the threshold."""

    session_id: int  # 1-based, chronological
    start_ts: int
    end_ts: int
    duration_minutes: float  # end - start, 0.0 for a single commit
    commits: tuple[Commit, ...]

    @property
    def commit_count(self) -> int:
        return len(self.commits)

    @property
    def start_date(self) -> datetime:
        return to_datetime(self.start_ts)

    @property
    def end_date(self) -> datetime:
        return to_datetime(self.end_ts)


@dataclass(frozen=True)
class SessionStats:
    """Aggregate session statistics. Unrounded; renderers round for display."""

    total_sessions: int = 0
    total_commits: int = 0
    avg_commits_per_session: float = 0.0
    avg_duration_minutes: float = 0.0
    median_duration_minutes: float = 0.0
    longest_session_minutes: float = 0.0
    shortest_session_minutes: float = 0.0


@dataclass(frozen=True)
class SessionDetectionResult:
    sessions: tuple[Session, ...]
    stats: SessionStats
    analysis_range: Optional[tuple[int, int]]  # (earliest, latest) unix seconds
    gap_threshold_minutes: float

    @property
    def range_dates(self) -> Optional[tuple[datetime, datetime]]:
        if self.analysis_range is None:
            return None
        start, end = self.analysis_range
        return to_datetime(start), to_datetime(end)
