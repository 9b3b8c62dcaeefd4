"""Report model: per-file results folded into one project summary.

The report is built incrementally with ``ReportBuilder``. Every
``add_file`` recomputes totals, category summaries and top issues from the
complete issue list, so the derived parts can never drift from the files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..core.scoring import overall_score
from ..exceptions import ReportError
from .issue import Category, Issue, Severity

TOP_ISSUES_LIMIT = 10


@dataclass(frozen=True)
class FileAnalysis:
    path: str
    lines_of_code: int
    issues: tuple[Issue, ...] = ()
    score: float = 100.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "issues", tuple(self.issues))

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "lines_of_code": self.lines_of_code,
            "issues": [issue.to_dict() for issue in self.issues],
            "score": self.score,
        }


@dataclass(frozen=True)
class CategorySummary:
    """Issue counts for one category, split by severity."""

    category: Category
    count: int = 0
    severity: Mapping[Severity, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        counts = {s: self.severity.get(s, 0) for s in Severity}
        object.__setattr__(self, "severity", MappingProxyType(counts))

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "count": self.count,
            "severity": {s.value: n for s, n in self.severity.items()},
        }


@dataclass(frozen=True)
class AnalysisOptions:
    language: str = "javascript"
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "include_patterns": list(self.include_patterns),
            "exclude_patterns": list(self.exclude_patterns),
        }


@dataclass(frozen=True)
class ReportSummary:
    total_files: int = 0
    total_issues: int = 0
    total_lines_of_code: int = 0
    overall_score: float = 100.0
    analysis_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    options: AnalysisOptions = field(default_factory=AnalysisOptions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_issues": self.total_issues,
            "total_lines_of_code": self.total_lines_of_code,
            "overall_score": self.overall_score,
            "analysis_date": self.analysis_date.isoformat(),
            "options": self.options.to_dict(),
        }


@dataclass(frozen=True)
class Report:
    """Finished analysis report.

    Attributes:
        summary: Totals, overall score, options and timestamp
        files: One entry per analyzed file, in analysis order
        categories: Non-empty category summaries, largest first
        top_issues: Most severe issues across the project
    """

    summary: ReportSummary
    files: tuple[FileAnalysis, ...]
    categories: tuple[CategorySummary, ...]
    top_issues: tuple[Issue, ...]

    @property
    def all_issues(self) -> list[Issue]:
        return [issue for f in self.files for issue in f.issues]

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-serializable view of the report."""
        return {
            "summary": self.summary.to_dict(),
            "files": [f.to_dict() for f in self.files],
            "categories": [c.to_dict() for c in self.categories],
            "top_issues": [issue.to_dict() for issue in self.top_issues],
        }


def summarize_categories(issues: list[Issue]) -> list[CategorySummary]:
    """Count issues per category; empty categories are dropped, largest first."""
    counts: dict[Category, dict[Severity, int]] = {}
    for issue in issues:
        by_severity = counts.setdefault(issue.category, {})
        by_severity[issue.severity] = by_severity.get(issue.severity, 0) + 1
    summaries = [
        CategorySummary(category, sum(counts[category].values()), counts[category])
        for category in Category
        if category in counts
    ]
    # sorted() is stable, so ties keep the Category declaration order
    return sorted(summaries, key=lambda s: s.count, reverse=True)


def select_top_issues(issues: list[Issue], limit: int = TOP_ISSUES_LIMIT) -> list[Issue]:
    return sorted(issues, key=lambda i: i.severity.weight, reverse=True)[:limit]


class ReportBuilder:
    """Incrementally assembles a Report.

    Usage:
        builder = ReportBuilder().with_options(options)
        builder.add_file(analysis)
        report = builder.build()
    """

    def __init__(self) -> None:
        self._summary = ReportSummary()
        self._files: list[FileAnalysis] = []
        self._categories: list[CategorySummary] = []
        self._top_issues: list[Issue] = []
        self._report: Optional[Report] = None

    @classmethod
    def create(cls) -> ReportBuilder:
        return cls()

    def with_options(self, options: AnalysisOptions) -> ReportBuilder:
        self._ensure_open()
        self._summary = replace(self._summary, options=options)
        return self

    def add_file(self, analysis: FileAnalysis) -> ReportBuilder:
        """Append a file result and refresh every derived value.

        Raises:
            ReportError: If an issue belongs to another file, or the report
                was already built
        """
        self._ensure_open()
        for issue in analysis.issues:
            if issue.location.file != analysis.path:
                raise ReportError(
                    f"issue {issue.id} is located in {issue.location.file!r}",
                    filepath=analysis.path,
                )
        self._files.append(analysis)
        self._update_summary()
        return self

    def build(self) -> Report:
        """Freeze the report. Calling build() again returns the same report."""
        if self._report is None:
            self._report = Report(
                summary=self._summary,
                files=tuple(self._files),
                categories=tuple(self._categories),
                top_issues=tuple(self._top_issues),
            )
        return self._report

    def _ensure_open(self) -> None:
        if self._report is not None:
            raise ReportError("report has already been built")

    def _update_summary(self) -> None:
        all_issues = [issue for f in self._files for issue in f.issues]
        self._summary = replace(
            self._summary,
            total_files=len(self._files),
            total_issues=len(all_issues),
            total_lines_of_code=sum(f.lines_of_code for f in self._files),
            overall_score=overall_score(self._files),
        )
        self._categories = summarize_categories(all_issues)
        self._top_issues = select_top_issues(all_issues)
