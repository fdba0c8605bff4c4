"""Markdown formatter for session analysis."""

from typing import Optional

from ..temporal.models import SessionDetectionResult
from .base import BaseFormatter, format_duration, limit_sessions


class SessionsMarkdownFormatter(BaseFormatter):
    """Summary table plus one row per session."""

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit

    def render(self, result: SessionDetectionResult) -> None:
        print(self.format(result))

    def format(self, result: SessionDetectionResult) -> str:
        stats = result.stats
        lines = ["# Session Analysis", ""]

        dates = result.range_dates
        if dates is not None:
            lines.append(
                f"**Analysis Period:** {dates[0]:%Y-%m-%d} to {dates[1]:%Y-%m-%d}"
            )
            lines.append("")

        lines += [
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Sessions | {stats.total_sessions} |",
            f"| Total Commits | {stats.total_commits} |",
            f"| Avg Commits/Session | {stats.avg_commits_per_session:.1f} |",
            f"| Avg Duration | {stats.avg_duration_minutes:.1f} min |",
            f"| Median Duration | {stats.median_duration_minutes:.1f} min |",
            f"| Longest Session | {stats.longest_session_minutes:.1f} min |",
            f"| Shortest Session | {stats.shortest_session_minutes:.1f} min |",
            "",
            "## Sessions",
            "",
            "| # | Date | Duration | Commits |",
            "|---|------|----------|---------|",
        ]
        for s in limit_sessions(result.sessions, self.limit):
            lines.append(
                f"| {s.session_id} | {s.start_date:%Y-%m-%d %H:%M} "
                f"| {format_duration(s.duration_minutes)} | {s.commit_count} |"
            )

        return "\n".join(lines)
