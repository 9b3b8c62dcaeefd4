"""Cyclomatic complexity per function and per file.

Complexity starts at 1 and grows by one for every branch point anywhere in
the function's subtree, nested functions included:

    if / ternary / switch case / default / for / for-in / for-of /
    while / do-while / catch / each && or || operator
"""

from __future__ import annotations

from ..models.issue import Category, Issue, IssueBuilder, IssueLocation, Severity
from ..scanning.syntax import ParsedFile, SyntaxNode, walk
from .base import BaseDetector
from .node_types import FUNCTION_TYPES, LOGICAL_OPERATORS, function_name

# for_in_statement covers both for-in and for-of.
BRANCH_TYPES = frozenset(
    {
        "if_statement",
        "ternary_expression",
        "switch_case",
        "switch_default",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "catch_clause",
    }
)


def cyclomatic_complexity(function_node: SyntaxNode) -> int:
    complexity = 1
    for node in walk(function_node):
        if node.type in BRANCH_TYPES:
            complexity += 1
        elif node.type == "binary_expression" and node.get("operator") in LOGICAL_OPERATORS:
            complexity += 1
    return complexity


def _severity(complexity: int) -> Severity:
    if complexity >= 20:
        return Severity.CRITICAL
    if complexity >= 15:
        return Severity.HIGH
    if complexity >= 10:
        return Severity.MEDIUM
    return Severity.LOW


class ComplexityDetector(BaseDetector):
    """Flags functions (and whole files) whose branching is too dense."""

    name = "complexity"
    DEFAULT_THRESHOLDS = {"function": 10, "file": 20}

    def _detect(self, parsed_file: ParsedFile) -> list[Issue]:
        issues: list[Issue] = []
        function_limit = self.get_threshold("function")
        complexities: list[int] = []

        for node in walk(parsed_file.ast):
            if node.type not in FUNCTION_TYPES:
                continue
            complexity = cyclomatic_complexity(node)
            complexities.append(complexity)
            if complexity > function_limit:
                issues.append(self._function_issue(parsed_file, node, complexity, function_limit))

        file_complexity = sum(complexities) / len(complexities) if complexities else 0.0
        file_limit = self.get_threshold("file")
        if file_complexity > file_limit:
            issues.append(self._file_issue(parsed_file, file_complexity, file_limit))

        return issues

    def _function_issue(
        self, parsed_file: ParsedFile, node: SyntaxNode, complexity: int, limit: float
    ) -> Issue:
        label = function_name(node)
        if label is None:
            label = "anonymous arrow function" if node.type == "arrow_function" else "anonymous function"
        else:
            label = f'"{label}"'
        location = self.create_location(parsed_file, node)

        return (
            IssueBuilder.create()
            .with_id(self.generate_issue_id())
            .with_category(Category.COMPLEXITY)
            .with_severity(_severity(complexity))
            .with_title(f"High cyclomatic complexity: {complexity}")
            .with_description(
                f"Function {label} has a cyclomatic complexity of {complexity}, "
                f"which exceeds the limit of {limit:g}."
            )
            .with_suggestion(
                "Split this function into smaller, focused functions. Extract "
                "independent branches into helpers and prefer early returns."
            )
            .with_location(location)
            .with_code_snippet(self.extract_code_snippet(parsed_file, location))
            .with_rule("cyclomatic-complexity")
            .build()
        )

    def _file_issue(self, parsed_file: ParsedFile, complexity: float, limit: float) -> Issue:
        return (
            IssueBuilder.create()
            .with_id(self.generate_issue_id())
            .with_category(Category.COMPLEXITY)
            .with_severity(Severity.MEDIUM)
            .with_title(f"High file complexity: {complexity:.1f}")
            .with_description(
                f"Functions in this file have an average cyclomatic complexity of "
                f"{complexity:.1f}, which exceeds the limit of {limit:g}."
            )
            .with_suggestion(
                "Split this file into smaller modules. Group related functions "
                "and move them into separate files."
            )
            .with_location(IssueLocation(file=parsed_file.path, line=1, column=0))
            .with_rule("file-complexity")
            .build()
        )
