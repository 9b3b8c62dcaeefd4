"""Rich terminal formatter for Revisor."""

import io
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models.issue import Issue, Severity
from ..models.report import Report
from .base import BaseFormatter

_SEVERITY_STYLES = {
    Severity.CRITICAL: "red bold",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "dim",
}


def _severity_label(severity: Severity) -> str:
    style = _SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value}[/{style}]"


def _score_label(score: float) -> str:
    if score >= 90:
        return f"[green]{score:.2f}[/green]"
    elif score >= 70:
        return f"[yellow]{score:.2f}[/yellow]"
    else:
        return f"[red]{score:.2f}[/red]"


class RichFormatter(BaseFormatter):
    """Rich terminal output with summary panel, category table and issue list."""

    def __init__(
        self,
        console: Optional[Console] = None,
        show_snippets: bool = True,
        max_issues_per_file: Optional[int] = None,
    ):
        self.console = console or Console()
        self.show_snippets = show_snippets
        self.max_issues_per_file = max_issues_per_file

    def render(self, report: Report) -> None:
        self._print_summary(report)
        self._print_categories(report)
        self._print_files(report)
        self._print_top_issues(report)

    def format(self, report: Report) -> str:
        # Capture into a string instead of writing to the terminal
        recorder = Console(record=True, width=self.console.width, file=io.StringIO())
        RichFormatter(recorder, self.show_snippets, self.max_issues_per_file).render(report)
        return recorder.export_text()

    # -- private helpers --

    def _print_summary(self, report: Report) -> None:
        summary = report.summary
        summary_text = (
            f"Analyzed [bold]{summary.total_files}[/bold] files "
            f"([cyan]{summary.options.language}[/cyan], "
            f"{summary.total_lines_of_code} lines of code)  |  "
            f"[yellow]{summary.total_issues}[/yellow] issues  |  "
            f"Score: {_score_label(summary.overall_score)}/100"
        )
        self.console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        self.console.print()

    def _print_categories(self, report: Report) -> None:
        if not report.categories:
            return

        table = Table(title="Issues by Category", expand=False)
        table.add_column("Category", style="cyan")
        table.add_column("Total", justify="right")
        for severity in reversed(Severity):
            table.add_column(severity.value.capitalize(), justify="right")

        for summary in report.categories:
            table.add_row(
                summary.category.value,
                str(summary.count),
                *(str(summary.severity[s]) for s in reversed(Severity)),
            )

        self.console.print(table)
        self.console.print()

    def _print_files(self, report: Report) -> None:
        for analysis in report.files:
            if not analysis.issues:
                continue
            self.console.print(
                f"[bold yellow]{escape(analysis.path)}[/bold yellow]  "
                f"score {_score_label(analysis.score)}  "
                f"[dim]({analysis.lines_of_code} lines of code)[/dim]"
            )
            shown = analysis.issues[: self.max_issues_per_file]
            for issue in shown:
                self._print_issue(issue)
            hidden = len(analysis.issues) - len(shown)
            if hidden:
                self.console.print(f"  [dim]... and {hidden} more issues[/dim]")
            self.console.print()

    def _print_issue(self, issue: Issue) -> None:
        self.console.print(
            f"  {issue.location.line}:{issue.location.column}  "
            f"{_severity_label(issue.severity)}  {escape(issue.title)}  "
            f"[dim]{issue.rule}[/dim]"
        )
        self.console.print(f"      {escape(issue.description)}")
        self.console.print(f"      [green]->[/green] {escape(issue.suggestion)}")
        if self.show_snippets and issue.code_snippet:
            for line in issue.code_snippet.split("\n"):
                self.console.print(f"      [dim]{escape(line)}[/dim]")

    def _print_top_issues(self, report: Report) -> None:
        if not report.top_issues:
            return

        table = Table(title=f"Top {len(report.top_issues)} Issues", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Severity", justify="center", width=10)
        table.add_column("Location", style="yellow", ratio=2)
        table.add_column("Issue", ratio=3)

        for i, issue in enumerate(report.top_issues, 1):
            table.add_row(
                str(i),
                _severity_label(issue.severity),
                escape(f"{issue.location.file}:{issue.location.line}"),
                escape(issue.title),
            )

        self.console.print(table)
