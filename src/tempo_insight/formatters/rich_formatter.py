"""Rich terminal formatters for Tempo Insight."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..modularity.models import FileModularityResult, ModularityFlag, ModularityResult
from ..temporal.models import SessionDetectionResult
from .base import BaseFormatter, format_duration, limit_sessions

# Files scoring below this are listed as needing attention
ATTENTION_SCORE = 7
RECENT_SESSIONS_SHOWN = 10

FLAG_LABELS = {
    ModularityFlag.NO_SINGLE_RESPONSIBILITY: "multiple responsibilities",
    ModularityFlag.NO_INTERNAL_STRUCTURE: "no sections/organization",
    ModularityFlag.HIGH_COUPLING: "high coupling (many imports)",
    ModularityFlag.LOW_COHESION: "low cohesion (bloated API)",
    ModularityFlag.UTILITY_GRAB_BAG: "utility grab-bag",
}


def _score_style(score: float) -> str:
    if score >= 9:
        return "green"
    elif score >= 7:
        return "blue"
    elif score >= 5:
        return "yellow"
    elif score >= 3:
        return "dark_orange"
    else:
        return "red"


def _score_label(score: float) -> str:
    style = _score_style(score)
    return f"[{style}]{score:g}/10[/{style}]"


def _duration_style(minutes: float) -> str:
    if minutes >= 120:
        return "green"
    elif minutes >= 60:
        return "cyan"
    elif minutes >= 30:
        return "yellow"
    else:
        return "dim"


class _ConsoleFormatter(BaseFormatter):
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def format(self, result) -> str:
        with self.console.capture() as capture:
            self.render(result)
        return capture.get()


class ModularityRichFormatter(_ConsoleFormatter):
    """Distribution bars, worst files, and an overall verdict."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False, top: int = 10):
        super().__init__(console)
        self.verbose = verbose
        self.top = top

    def render(self, result: ModularityResult) -> None:
        out = self.console
        summary = result.summary

        out.print()
        out.print("[bold cyan]MODULARITY ANALYSIS[/bold cyan]")
        out.rule(style="dim")
        out.print(
            f"Analyzed [bold]{summary.total_files}[/bold] files "
            f"([bold]{summary.total_lines:,}[/bold] lines)"
        )
        out.print(f"Average modularity score: {_score_label(summary.avg_score)}")
        out.print()

        self._print_distribution(result)

        needs_attention = [f for f in result.files if f.score < ATTENTION_SCORE]
        if needs_attention:
            out.print(
                f"[bold yellow]Files Needing Attention ({len(needs_attention)}):[/bold yellow]"
            )
            out.print()
            for f in needs_attention[: self.top]:
                self._print_file(f)
            if len(needs_attention) > self.top:
                out.print(f"  [dim]...and {len(needs_attention) - self.top} more[/dim]")
            out.print()
        else:
            out.print("[green]All analyzed files have good modularity![/green]")
            out.print()

        if self.verbose and summary.largest_files:
            table = Table(title="Largest Files", show_header=True, title_justify="left")
            table.add_column("File")
            table.add_column("Lines", justify="right")
            table.add_column("Score", justify="right")
            for lf in summary.largest_files:
                table.add_row(escape(lf.path), str(lf.lines), _score_label(lf.score))
            out.print(table)
            out.print()

        if self.verbose and result.exempted:
            out.print(f"[dim]{len(result.exempted)} files exempted (tests, generated)[/dim]")
            out.print()

        self._print_verdict(summary.avg_score, len(needs_attention))

    def _print_distribution(self, result: ModularityResult) -> None:
        dist = result.summary.distribution
        total = dist.total
        rows = (
            ("Elite (9-10)", dist.elite, "green"),
            ("Good (7-8)", dist.good, "blue"),
            ("Acceptable (5-6)", dist.acceptable, "yellow"),
            ("Needs Work (3-4)", dist.needs_work, "dark_orange"),
            ("Poor (0-2)", dist.poor, "red"),
        )
        self.console.print("[bold]Score Distribution:[/bold]")
        for label, count, style in rows:
            pct = round(count / total * 100) if total else 0
            width = round(pct / 5)
            bar = f"[{style}]{'█' * width}[/{style}][dim]{'░' * (20 - width)}[/dim]"
            self.console.print(f"  {label:<18} {bar} {pct}%")
        self.console.print()

    def _print_file(self, f: FileModularityResult) -> None:
        pattern = f" [dim]\\[{f.pattern.value}][/dim]" if f.pattern else ""
        self.console.print(
            f"  {_score_label(f.score)} {escape(f.path)} [dim]{f.lines} lines[/dim]{pattern}"
        )
        if f.flags:
            labels = ", ".join(FLAG_LABELS.get(flag, flag.value) for flag in f.flags)
            self.console.print(f"       [dim]{labels}[/dim]")
        if self.verbose:
            s = f.signals
            self.console.print(
                f"       [dim]sections: {s.section_count}, exports: {s.export_count}, "
                f"imports: {s.import_count}[/dim]"
            )

    def _print_verdict(self, avg_score: float, problem_count: int) -> None:
        self.console.rule(style="dim")
        if avg_score >= 8 and problem_count == 0:
            self.console.print("[bold green]Excellent modularity! Your codebase is well-organized.[/bold green]")
        elif avg_score >= 7:
            self.console.print("[bold blue]Good modularity. Minor improvements possible.[/bold blue]")
        elif avg_score >= 5:
            self.console.print(
                "[bold yellow]Acceptable modularity. Consider refactoring flagged files.[/bold yellow]"
            )
        else:
            self.console.print(
                "[bold red]Modularity needs attention. Several files require refactoring.[/bold red]"
            )


class SessionsRichFormatter(_ConsoleFormatter):
    """Summary statistics and the most recent sessions."""

    def __init__(self, console: Optional[Console] = None, limit: Optional[int] = None):
        super().__init__(console)
        self.limit = limit

    def render(self, result: SessionDetectionResult) -> None:
        out = self.console
        stats = result.stats

        out.print()
        out.print("[bold cyan]SESSION ANALYSIS[/bold cyan]")
        out.rule(style="dim")

        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("Metric", min_width=22)
        table.add_column("Value", style="cyan")
        table.add_row("Total Sessions", str(stats.total_sessions))
        table.add_row("Total Commits", str(stats.total_commits))
        table.add_row("Avg Commits/Session", f"{stats.avg_commits_per_session:.1f}")
        table.add_row("Avg Duration", format_duration(stats.avg_duration_minutes))
        table.add_row("Median Duration", format_duration(stats.median_duration_minutes))
        table.add_row("Longest Session", format_duration(stats.longest_session_minutes))
        table.add_row("Shortest Session", format_duration(stats.shortest_session_minutes))
        out.print(table)
        out.print()

        dates = result.range_dates
        if dates is not None:
            out.print(f"[dim]Period: {dates[0]:%b %d, %Y} - {dates[1]:%b %d, %Y}[/dim]")
            out.print()

        sessions = limit_sessions(result.sessions, self.limit)
        if not sessions:
            return

        out.print("[bold]Recent Sessions:[/bold]")
        recent = list(reversed(sessions))[:RECENT_SESSIONS_SHOWN]
        for s in recent:
            style = _duration_style(s.duration_minutes)
            duration = format_duration(s.duration_minutes).rjust(8)
            out.print(
                f"  [dim]#{s.session_id:>3}[/dim] {s.start_date:%b %d, %H:%M} "
                f"[{style}]{duration}[/{style}] [cyan]{s.commit_count} commits[/cyan]"
            )
        if len(sessions) > RECENT_SESSIONS_SHOWN:
            out.print(f"  [dim]... and {len(sessions) - RECENT_SESSIONS_SHOWN} more sessions[/dim]")
        out.print()
