"""Work-session detection from commit history.

A session is a run of commits where no two consecutive commits are more than
``gap_threshold_minutes`` apart. The gap is measured against the previous
commit, not the session start, and only a gap strictly greater than the
threshold opens a new session.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..config import DEFAULT_GAP_MINUTES, validate_gap_threshold
from ..logging_config import get_logger
from .models import Commit, Session, SessionDetectionResult, SessionStats

logger = get_logger(__name__)


def detect_sessions(
    commits: Sequence[Commit],
    gap_threshold_minutes: float = DEFAULT_GAP_MINUTES,
) -> SessionDetectionResult:
    """Partition commits into work sessions.

    Commits need not be sorted; they are ordered by timestamp first (ties
    keep their input order).

    Args:
        commits: Commits to partition
        gap_threshold_minutes: Idle minutes that close a session

    Returns:
        SessionDetectionResult with chronological sessions and statistics

    Raises:
        InvalidConfigError: If the threshold is not a positive number
    """
    threshold = validate_gap_threshold(gap_threshold_minutes)

    if not commits:
        return SessionDetectionResult(
            sessions=(),
            stats=SessionStats(),
            analysis_range=None,
            gap_threshold_minutes=threshold,
        )

    ordered = sorted(commits, key=lambda c: c.timestamp)
    threshold_seconds = threshold * 60

    groups: list[list[Commit]] = [[ordered[0]]]
    for prev, commit in zip(ordered, ordered[1:]):
        if commit.timestamp - prev.timestamp > threshold_seconds:
            groups.append([commit])
        else:
            groups[-1].append(commit)

    sessions = tuple(_build_session(i, group) for i, group in enumerate(groups, start=1))
    stats = compute_stats(sessions)

    logger.debug(
        f"Detected {stats.total_sessions} sessions from {stats.total_commits} commits "
        f"(gap threshold {threshold:g}m)"
    )

    return SessionDetectionResult(
        sessions=sessions,
        stats=stats,
        analysis_range=(ordered[0].timestamp, ordered[-1].timestamp),
        gap_threshold_minutes=threshold,
    )


def _build_session(session_id: int, commits: list[Commit]) -> Session:
    start_ts = commits[0].timestamp
    end_ts = commits[-1].timestamp
    return Session(
        session_id=session_id,
        start_ts=start_ts,
        end_ts=end_ts,
        duration_minutes=(end_ts - start_ts) / 60,
        commits=tuple(commits),
    )


def compute_stats(sessions: Sequence[Session]) -> SessionStats:
    """Aggregate statistics over a set of sessions."""
    if not sessions:
        return SessionStats()

    total_commits = sum(s.commit_count for s in sessions)
    durations = np.array([s.duration_minutes for s in sessions], dtype=float)

    return SessionStats(
        total_sessions=len(sessions),
        total_commits=total_commits,
        avg_commits_per_session=total_commits / len(sessions),
        avg_duration_minutes=float(durations.mean()),
        median_duration_minutes=float(np.median(durations)),
        longest_session_minutes=float(durations.max()),
        shortest_session_minutes=float(durations.min()),
    )
