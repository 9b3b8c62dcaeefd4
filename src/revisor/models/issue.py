"""Issue model: what a detector reports about one place in one file.

Issues are frozen once built. Detectors never instantiate ``Issue``
directly; they go through ``IssueBuilder``, which refuses to finalize an
issue with a required field missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..exceptions import IssueBuildError


class Severity(str, Enum):
    """Issue severity, ordered low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def weight(self) -> int:
        return SEVERITY_WEIGHTS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight < other.weight

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight <= other.weight

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight > other.weight

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight >= other.weight


SEVERITY_WEIGHTS = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


class Category(str, Enum):
    COMPLEXITY = "complexity"
    NAMING = "naming"
    SIZE = "size"
    DUPLICATION = "duplication"
    BEST_PRACTICES = "best-practices"


@dataclass(frozen=True)
class IssueLocation:
    file: str
    line: int
    column: int
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


@dataclass(frozen=True)
class Issue:
    """A single reported problem.

    Attributes:
        id: Unique per emission
        category: Which detector family produced it
        severity: How bad it is
        title: One-line summary
        description: What was measured and against which limit
        suggestion: How to fix it
        location: Where it is
        rule: Stable rule identifier (e.g. "cyclomatic-complexity")
        code_snippet: Source lines around the location, if available
    """

    id: str
    category: Category
    severity: Severity
    title: str
    description: str
    suggestion: str
    location: IssueLocation
    rule: str
    code_snippet: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "suggestion": self.suggestion,
            "location": self.location.to_dict(),
            "code_snippet": self.code_snippet,
            "rule": self.rule,
        }


_REQUIRED_FIELDS = (
    "id",
    "category",
    "severity",
    "title",
    "description",
    "suggestion",
    "location",
    "rule",
)


class IssueBuilder:
    """Staged construction of an Issue.

    Example:
        >>> issue = (
        ...     IssueBuilder()
        ...     .with_id("size_1")
        ...     .with_category(Category.SIZE)
        ...     .with_severity(Severity.LOW)
        ...     .with_title("Large file: 320 lines")
        ...     .with_description("...")
        ...     .with_suggestion("...")
        ...     .with_location(IssueLocation("app.js", 1, 0))
        ...     .with_rule("file-size")
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    @classmethod
    def create(cls) -> IssueBuilder:
        return cls()

    def with_id(self, issue_id: str) -> IssueBuilder:
        self._values["id"] = issue_id
        return self

    def with_category(self, category: Category) -> IssueBuilder:
        self._values["category"] = category
        return self

    def with_severity(self, severity: Severity) -> IssueBuilder:
        self._values["severity"] = severity
        return self

    def with_title(self, title: str) -> IssueBuilder:
        self._values["title"] = title
        return self

    def with_description(self, description: str) -> IssueBuilder:
        self._values["description"] = description
        return self

    def with_suggestion(self, suggestion: str) -> IssueBuilder:
        self._values["suggestion"] = suggestion
        return self

    def with_location(self, location: IssueLocation) -> IssueBuilder:
        self._values["location"] = location
        return self

    def with_code_snippet(self, snippet: Optional[str]) -> IssueBuilder:
        self._values["code_snippet"] = snippet
        return self

    def with_rule(self, rule: str) -> IssueBuilder:
        self._values["rule"] = rule
        return self

    def build(self) -> Issue:
        """Finalize the issue.

        Raises:
            IssueBuildError: If any required field is missing or empty
        """
        missing = [name for name in _REQUIRED_FIELDS if not self._values.get(name)]
        if missing:
            raise IssueBuildError(missing)
        return Issue(**self._values)
