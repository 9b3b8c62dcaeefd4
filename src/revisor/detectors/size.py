"""Size limits: files, functions, classes and methods."""

from __future__ import annotations

from typing import Optional

from ..models.issue import Category, Issue, IssueBuilder, IssueLocation, Severity
from ..scanning.syntax import ParsedFile, SyntaxNode, walk
from .base import BaseDetector
from .node_types import CLASS_TYPES, FUNCTION_TYPES, function_name, parameter_count


def severity_for_ratio(actual: float, threshold: float) -> Severity:
    """Severity from how far ``actual`` overshoots ``threshold``."""
    if threshold <= 0:
        return Severity.CRITICAL
    ratio = actual / threshold
    if ratio >= 3:
        return Severity.CRITICAL
    if ratio >= 2:
        return Severity.HIGH
    if ratio >= 1.5:
        return Severity.MEDIUM
    return Severity.LOW


def line_span(node: SyntaxNode) -> int:
    if node.loc is None:
        return 0
    return node.loc.line_span


class SizeDetector(BaseDetector):
    name = "size"
    DEFAULT_THRESHOLDS = {
        "fileLines": 300,
        "functionLines": 50,
        "functionParameters": 5,
        "classLines": 200,
        "methodLines": 30,
    }

    def _detect(self, parsed_file: ParsedFile) -> list[Issue]:
        issues: list[Issue] = []

        file_limit = self.get_threshold("fileLines")
        if parsed_file.lines_of_code > file_limit:
            issues.append(
                self._issue(
                    parsed_file,
                    None,
                    rule="file-size",
                    title=f"Large file: {parsed_file.lines_of_code} lines",
                    description=(
                        f"The file has {parsed_file.lines_of_code} lines of code, "
                        f"above the recommended limit of {file_limit:g}."
                    ),
                    suggestion=(
                        "Split this file into smaller, focused modules. Group related "
                        "functionality and move it into separate files."
                    ),
                    severity=severity_for_ratio(parsed_file.lines_of_code, file_limit),
                )
            )

        for node in walk(parsed_file.ast):
            if node.type in CLASS_TYPES:
                issues.extend(self._check_class(parsed_file, node))
            elif node.type == "method_definition":
                issues.extend(self._check_function(parsed_file, node, "method", "methodLines"))
            elif node.type in FUNCTION_TYPES:
                issues.extend(self._check_function(parsed_file, node, "function", "functionLines"))

        return issues

    def _check_function(
        self, parsed_file: ParsedFile, node: SyntaxNode, kind: str, lines_key: str
    ) -> list[Issue]:
        issues = []
        label = function_name(node) or f"anonymous {kind}"

        lines = line_span(node)
        line_limit = self.get_threshold(lines_key)
        if lines > line_limit:
            issues.append(
                self._issue(
                    parsed_file,
                    node,
                    rule=f"{kind}-length",
                    title=f"Large {kind}: {lines} lines",
                    description=(
                        f'The {kind} "{label}" has {lines} lines, above the '
                        f"recommended limit of {line_limit:g}."
                    ),
                    suggestion=(
                        f"Break this {kind} into smaller, focused pieces. Extract "
                        "logical blocks into well-named helpers."
                    ),
                    severity=severity_for_ratio(lines, line_limit),
                )
            )

        params = parameter_count(node)
        param_limit = self.get_threshold("functionParameters")
        if params > param_limit:
            issues.append(
                self._issue(
                    parsed_file,
                    node,
                    rule=f"{kind}-parameters",
                    title=f"Too many parameters: {params}",
                    description=(
                        f'The {kind} "{label}" takes {params} parameters, above the '
                        f"recommended limit of {param_limit:g}."
                    ),
                    suggestion=(
                        "Group related parameters into an options object, or split "
                        f"the {kind} so each part needs fewer inputs."
                    ),
                    severity=severity_for_ratio(params, param_limit),
                )
            )
        return issues

    def _check_class(self, parsed_file: ParsedFile, node: SyntaxNode) -> list[Issue]:
        lines = line_span(node)
        limit = self.get_threshold("classLines")
        if lines <= limit:
            return []
        label = node.name_text() or "anonymous class"
        return [
            self._issue(
                parsed_file,
                node,
                rule="class-size",
                title=f"Large class: {lines} lines",
                description=(
                    f'The class "{label}" has {lines} lines, above the recommended '
                    f"limit of {limit:g}."
                ),
                suggestion=(
                    "Split this class by responsibility. Move related methods into "
                    "collaborating classes or use composition."
                ),
                severity=severity_for_ratio(lines, limit),
            )
        ]

    def _issue(
        self,
        parsed_file: ParsedFile,
        node: Optional[SyntaxNode],
        *,
        rule: str,
        title: str,
        description: str,
        suggestion: str,
        severity: Severity,
    ) -> Issue:
        builder = (
            IssueBuilder.create()
            .with_id(self.generate_issue_id())
            .with_category(Category.SIZE)
            .with_severity(severity)
            .with_title(title)
            .with_description(description)
            .with_suggestion(suggestion)
            .with_rule(rule)
        )
        if node is None:
            builder.with_location(IssueLocation(file=parsed_file.path, line=1, column=0))
        else:
            location = self.create_location(parsed_file, node)
            builder.with_location(location)
            builder.with_code_snippet(self.extract_code_snippet(parsed_file, location))
        return builder.build()
