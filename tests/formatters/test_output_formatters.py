"""Tests for JSON, Markdown and terminal output."""

import io
import json

import pytest
from rich.console import Console

from tempo_insight.formatters import (
    ModularityJsonFormatter,
    ModularityRichFormatter,
    SessionsJsonFormatter,
    SessionsMarkdownFormatter,
    SessionsRichFormatter,
    format_duration,
    modularity_to_dict,
    sessions_to_dict,
)
from tempo_insight.formatters.base import limit_sessions
from tempo_insight.modularity import (
    ExemptedFile,
    FileModularityResult,
    ModularityFlag,
    ModularityResult,
    Pattern,
    Rating,
    StructuralSignals,
    summarize,
)
from tempo_insight.temporal import detect_sessions


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def modularity_result():
    files = [
        FileModularityResult(
            path="src/UserStore.ts",
            lines=1600,
            pattern=Pattern.DATA_STORE,
            score=5,
            rating=Rating.ACCEPTABLE,
            flags=(ModularityFlag.NO_INTERNAL_STRUCTURE, ModularityFlag.HIGH_COUPLING),
            signals=StructuralSignals(import_count=18),
        ),
        FileModularityResult(
            path="src/main.ts",
            lines=120,
            pattern=None,
            score=10,
            rating=Rating.ELITE,
            flags=(),
            signals=StructuralSignals(),
        ),
    ]
    exempted = [ExemptedFile(path="src/app.test.ts", lines=40, reason="Test files are exempt")]
    summary = summarize(files, total_files=3, total_lines=1760)
    return ModularityResult(files=files, summary=summary, exempted=exempted)


@pytest.fixture
def sessions_result(make_commit):
    commits = [make_commit(1, 0), make_commit(2, 30), make_commit(3, 200)]
    return detect_sessions(commits, 90)


class TestFormatDuration:
    """Tests for human-readable durations."""

    @pytest.mark.parametrize(
        "minutes,expected",
        [
            (0, "<1m"),
            (0.5, "<1m"),
            (45, "45m"),
            (60, "1h"),
            (135, "2h 15m"),
            (119.6, "2h"),
        ],
    )
    def test_format(self, minutes, expected):
        """Minutes below an hour, hours and minutes above."""
        assert format_duration(minutes) == expected

    def test_limit_sessions(self):
        """The most recent N are kept; no limit keeps all."""
        assert limit_sessions([1, 2, 3], 2) == [2, 3]
        assert limit_sessions([1, 2, 3], None) == [1, 2, 3]


class TestModularityJson:
    """Tests for modularity JSON output."""

    def test_structure(self, modularity_result):
        """Files, summary and exempted use camelCase keys."""
        data = modularity_to_dict(modularity_result)

        first = data["files"][0]
        assert first["file"] == "src/UserStore.ts"
        assert first["pattern"] == "store"
        assert first["rating"] == "acceptable"
        assert first["flags"] == ["no-internal-structure", "high-coupling"]
        assert first["details"]["importCount"] == 18
        assert data["files"][1]["pattern"] is None

        summary = data["summary"]
        assert summary["totalFiles"] == 3
        assert summary["totalLines"] == 1760
        assert summary["avgScore"] == 7.5
        assert summary["distribution"]["acceptable"] == 1
        assert summary["distribution"]["needsWork"] == 0
        assert summary["largestFiles"][0]["file"] == "src/UserStore.ts"

        assert data["exempted"][0]["reason"] == "Test files are exempt"

    def test_format_is_valid_json(self, modularity_result):
        """format() returns parseable JSON."""
        text = ModularityJsonFormatter().format(modularity_result)
        assert json.loads(text) == modularity_to_dict(modularity_result)


class TestSessionsJson:
    """Tests for session JSON output."""

    def test_structure(self, sessions_result):
        """Statistics, range and sessions are present."""
        data = sessions_to_dict(sessions_result)
        assert data["totalSessions"] == 2
        assert data["totalCommits"] == 3
        assert data["avgDurationMinutes"] == 15.0
        assert data["gapThresholdMinutes"] == 90.0
        assert data["analysisRange"]["from"] == "2023-11-14T22:13:20+00:00"

        first = data["sessions"][0]
        assert first["sessionId"] == 1
        assert first["durationMinutes"] == 30.0
        assert first["numCommits"] == 2
        assert len(first["commits"]) == 2

    def test_limit_keeps_latest(self, sessions_result):
        """A limit trims sessions but not the totals."""
        data = json.loads(SessionsJsonFormatter(limit=1).format(sessions_result))
        assert [s["sessionId"] for s in data["sessions"]] == [2]
        assert data["totalSessions"] == 2

    def test_empty_result(self):
        """No commits yields a null range."""
        data = sessions_to_dict(detect_sessions([], 90))
        assert data["analysisRange"] is None
        assert data["sessions"] == []


class TestSessionsMarkdown:
    """Tests for Markdown session output."""

    def test_report(self, sessions_result):
        """Heading, period, summary table and one row per session."""
        text = SessionsMarkdownFormatter().format(sessions_result)
        assert text.startswith("# Session Analysis")
        assert "**Analysis Period:** 2023-11-14 to 2023-11-14" in text
        assert "| Total Sessions | 2 |" in text
        assert "| Avg Duration | 15.0 min |" in text
        assert "| 1 | 2023-11-14 22:13 | 30m | 2 |" in text
        assert "| 2 | 2023-11-15 01:33 | <1m | 1 |" in text


class TestRichOutput:
    """Tests for terminal output."""

    def test_modularity_report(self, modularity_result):
        """Flagged files are listed with readable flag names."""
        text = ModularityRichFormatter(console=_console()).format(modularity_result)
        assert "MODULARITY ANALYSIS" in text
        assert "Files Needing Attention (1)" in text
        assert "src/UserStore.ts" in text
        assert "no sections/organization" in text
        assert "Largest Files" not in text

    def test_modularity_verbose(self, modularity_result):
        """Verbose output adds the largest files and exempt count."""
        text = ModularityRichFormatter(console=_console(), verbose=True).format(modularity_result)
        assert "Largest Files" in text
        assert "1 files exempted" in text
        assert "imports: 18" in text

    def test_all_good(self):
        """With nothing below 7 the report says so."""
        summary = summarize([], total_files=0, total_lines=0)
        result = ModularityResult(files=[], summary=summary)
        text = ModularityRichFormatter(console=_console()).format(result)
        assert "All analyzed files have good modularity!" in text
        assert "10/10" in text

    def test_sessions_report(self, sessions_result):
        """Statistics and most recent sessions first."""
        text = SessionsRichFormatter(console=_console()).format(sessions_result)
        assert "SESSION ANALYSIS" in text
        assert "Total Sessions" in text
        assert "Recent Sessions" in text
        assert text.index("#  2") < text.index("#  1")
