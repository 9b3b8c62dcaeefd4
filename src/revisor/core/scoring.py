"""Score aggregation: issues in, a bounded 0-100 quality score out.

Each issue costs a fixed penalty by severity. Larger files absorb a little
more penalty before their score drops (up to 20% relief at 200+ lines of
code). Scores are clamped to [0, 100] and rounded to 2 decimal places.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from ..models.issue import Issue
    from ..models.report import FileAnalysis

# Keyed by Severity value
SEVERITY_PENALTIES = {
    "critical": 10,
    "high": 5,
    "medium": 2,
    "low": 1,
}

MAX_SCORE = 100.0
_SIZE_RELIEF_CAP = 2.0
_SIZE_RELIEF_FACTOR = 0.1


def raw_penalty(issues: Iterable["Issue"]) -> int:
    return sum(SEVERITY_PENALTIES[issue.severity.value] for issue in issues)


def size_adjustment(lines_of_code: int) -> float:
    """Divisor applied to the raw penalty, between 1.0 and 1.2."""
    return 1 + min(lines_of_code / 100, _SIZE_RELIEF_CAP) * _SIZE_RELIEF_FACTOR


def calculate_file_score(issues: Sequence["Issue"], lines_of_code: int) -> float:
    """Score a single file.

    Args:
        issues: Every issue reported for the file
        lines_of_code: The file's blank/comment-stripped line count

    Returns:
        Score in [0, 100]; exactly 100.0 when there are no issues
    """
    if not issues:
        return MAX_SCORE

    adjusted = raw_penalty(issues) / size_adjustment(max(lines_of_code, 0))
    score = max(0.0, min(MAX_SCORE, MAX_SCORE - adjusted))
    return round(score, 2)


def overall_score(files: Sequence["FileAnalysis"]) -> float:
    """Arithmetic mean of file scores, 100.0 for an empty project."""
    if not files:
        return MAX_SCORE
    return round(sum(f.score for f in files) / len(files), 2)
