"""JSON formatters for modularity and session results."""

import json
from typing import Any, Optional

from ..modularity.models import ModularityResult
from ..temporal.models import SessionDetectionResult, to_datetime
from .base import BaseFormatter, limit_sessions


def modularity_to_dict(result: ModularityResult) -> dict[str, Any]:
    summary = result.summary
    dist = summary.distribution
    return {
        "files": [
            {
                "file": f.path,
                "lines": f.lines,
                "pattern": f.pattern.value if f.pattern else None,
                "score": f.score,
                "rating": f.rating.value,
                "flags": [flag.value for flag in f.flags],
                "details": {
                    "hasSections": f.signals.has_sections,
                    "sectionCount": f.signals.section_count,
                    "exportCount": f.signals.export_count,
                    "importCount": f.signals.import_count,
                    "hasNestedClasses": f.signals.has_nested_classes,
                    "methodCount": f.signals.method_count,
                },
            }
            for f in result.files
        ],
        "summary": {
            "totalFiles": summary.total_files,
            "totalLines": summary.total_lines,
            "avgScore": summary.avg_score,
            "distribution": {
                "elite": dist.elite,
                "good": dist.good,
                "acceptable": dist.acceptable,
                "needsWork": dist.needs_work,
                "poor": dist.poor,
            },
            "largestFiles": [
                {"file": f.path, "lines": f.lines, "score": f.score}
                for f in summary.largest_files
            ],
        },
        "exempted": [
            {"file": e.path, "lines": e.lines, "reason": e.reason} for e in result.exempted
        ],
    }


def sessions_to_dict(result: SessionDetectionResult, limit: Optional[int] = None) -> dict[str, Any]:
    stats = result.stats
    analysis_range = None
    if result.analysis_range is not None:
        start, end = result.analysis_range
        analysis_range = {
            "from": to_datetime(start).isoformat(),
            "to": to_datetime(end).isoformat(),
        }

    return {
        "totalSessions": stats.total_sessions,
        "totalCommits": stats.total_commits,
        "avgCommitsPerSession": round(stats.avg_commits_per_session, 1),
        "avgDurationMinutes": round(stats.avg_duration_minutes, 1),
        "medianDurationMinutes": round(stats.median_duration_minutes, 1),
        "longestSessionMinutes": round(stats.longest_session_minutes, 1),
        "shortestSessionMinutes": round(stats.shortest_session_minutes, 1),
        "gapThresholdMinutes": result.gap_threshold_minutes,
        "analysisRange": analysis_range,
        "sessions": [
            {
                "sessionId": s.session_id,
                "startDate": s.start_date.isoformat(),
                "endDate": s.end_date.isoformat(),
                "durationMinutes": round(s.duration_minutes, 1),
                "numCommits": s.commit_count,
                "commits": [c.hash for c in s.commits],
            }
            for s in limit_sessions(result.sessions, limit)
        ],
    }


class ModularityJsonFormatter(BaseFormatter):
    """Render a modularity result as JSON."""

    def render(self, result: ModularityResult) -> None:
        print(self.format(result))

    def format(self, result: ModularityResult) -> str:
        return json.dumps(modularity_to_dict(result), indent=2)


class SessionsJsonFormatter(BaseFormatter):
    """Render session detection output as JSON."""

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit

    def render(self, result: SessionDetectionResult) -> None:
        print(self.format(result))

    def format(self, result: SessionDetectionResult) -> str:
        return json.dumps(sessions_to_dict(result, self.limit), indent=2)
