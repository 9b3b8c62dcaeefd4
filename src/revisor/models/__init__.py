"""Data models shared by detectors, the engine and formatters."""

from .issue import Category, Issue, IssueBuilder, IssueLocation, Severity
from .report import (
    AnalysisOptions,
    CategorySummary,
    FileAnalysis,
    Report,
    ReportBuilder,
    ReportSummary,
)

__all__ = [
    "Category",
    "Issue",
    "IssueBuilder",
    "IssueLocation",
    "Severity",
    "AnalysisOptions",
    "CategorySummary",
    "FileAnalysis",
    "Report",
    "ReportBuilder",
    "ReportSummary",
]
