"""Naming conventions for declarations.

Checked roles: function, variable, constant, class, method and object
property names. Each rule that a name breaks becomes its own issue.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from ..models.issue import Category, Issue, IssueBuilder, Severity
from ..scanning.syntax import ParsedFile, SyntaxNode, walk
from .base import BaseDetector
from .node_types import CLASS_TYPES, FUNCTION_DECLARATION_TYPES

GENERIC_WORDS = ("temp", "tmp", "data", "info", "obj", "item", "elem", "val", "num")
ABBREVIATIONS = ("btn", "txt", "img", "div", "el", "str", "arr", "fn")

CAMEL_CASE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
UPPER_SNAKE_CASE = re.compile(r"^[A-Z][A-Z0-9_]*$")
LETTER_AND_DIGITS = re.compile(r"^[a-zA-Z]?[0-9]+$")

# Roles subject to the camelCase rule.
_CAMEL_CASE_ROLES = ("function", "method", "variable", "property")

_SEVERITY = {
    "generic": Severity.HIGH,
    "double_underscore": Severity.HIGH,
    "too_short": Severity.MEDIUM,
    "abbreviation": Severity.MEDIUM,
    "numeric": Severity.MEDIUM,
    "casing": Severity.LOW,
    "too_long": Severity.LOW,
}

_SUGGESTIONS = {
    "camelCase": 'Use camelCase: start lower case and capitalize each following word (e.g. "getUserName", "calculateTotal").',
    "PascalCase": 'Use PascalCase: capitalize every word (e.g. "UserService", "DataProcessor").',
    "UPPER_SNAKE_CASE": 'Use UPPER_SNAKE_CASE for constants (e.g. "MAX_RETRIES", "API_BASE_URL").',
}


@dataclass(frozen=True)
class NamingProblem:
    kind: str
    message: str
    convention: Optional[str] = None

    @property
    def severity(self) -> Severity:
        return _SEVERITY[self.kind]


def is_constant_declarator(node: SyntaxNode) -> bool:
    """A ``const`` declarator whose name is already all upper case."""
    parent = node.parent
    name = node.name_text("name")
    return (
        parent is not None
        and parent.type == "lexical_declaration"
        and parent.get("kind") == "const"
        and bool(name)
        and name == name.upper()
    )


class NamingDetector(BaseDetector):
    """Flags names that are too short, too long, vague or wrongly cased.

    Options:
        patterns: {"camelCase", "constants", "functions", "variables"} -> bool
        generic_words: Replaces the built-in placeholder word list
        abbreviations: Replaces the built-in abbreviation list
    """

    name = "naming"
    DEFAULT_THRESHOLDS = {"minLength": 3, "maxLength": 30}

    def _detect(self, parsed_file: ParsedFile) -> list[Issue]:
        issues: list[Issue] = []
        for node, identifier, role in self._declarations(parsed_file.ast):
            for problem in self.analyze_identifier(identifier, role):
                issues.append(self._issue(parsed_file, node, identifier, role, problem))
        return issues

    def _pattern_enabled(self, key: str) -> bool:
        patterns = self.config.options.get("patterns") or {}
        return bool(patterns.get(key, True))

    def _declarations(self, root: SyntaxNode) -> Iterator[tuple[SyntaxNode, str, str]]:
        check_functions = self._pattern_enabled("functions")
        check_variables = self._pattern_enabled("variables")

        for node in walk(root):
            if node.type in FUNCTION_DECLARATION_TYPES:
                name = node.name_text()
                if name and check_functions:
                    yield node, name, "function"
            elif node.type == "variable_declarator":
                name_node = node.get("name")
                if isinstance(name_node, SyntaxNode) and name_node.type == "identifier":
                    role = "constant" if is_constant_declarator(node) else "variable"
                    if name_node.text and (check_variables or role == "constant"):
                        yield node, name_node.text, role
            elif node.type in CLASS_TYPES:
                name = node.name_text()
                if name:
                    yield node, name, "class"
            elif node.type == "method_definition":
                name_node = node.get("name")
                if (
                    isinstance(name_node, SyntaxNode)
                    and name_node.type == "property_identifier"
                    and name_node.text
                    and name_node.text != "constructor"
                    and check_functions
                ):
                    yield node, name_node.text, "method"
            elif node.type == "pair":
                key = node.get("key")
                if isinstance(key, SyntaxNode) and key.type == "property_identifier" and key.text:
                    yield node, key.text, "property"

    def analyze_identifier(self, name: str, role: str) -> list[NamingProblem]:
        """Every rule ``name`` breaks for the given role."""
        problems: list[NamingProblem] = []
        min_length = self.get_threshold("minLength")
        max_length = self.get_threshold("maxLength")

        if len(name) < min_length:
            problems.append(
                NamingProblem("too_short", f"is too short ({len(name)} characters, min {min_length:g})")
            )
        if len(name) > max_length:
            problems.append(
                NamingProblem("too_long", f"is too long ({len(name)} characters, max {max_length:g})")
            )

        if role == "constant":
            if self._pattern_enabled("constants") and not UPPER_SNAKE_CASE.match(name):
                problems.append(
                    NamingProblem("casing", "should use UPPER_SNAKE_CASE", "UPPER_SNAKE_CASE")
                )
        elif role == "class":
            if not PASCAL_CASE.match(name):
                problems.append(NamingProblem("casing", "should use PascalCase", "PascalCase"))
        elif role in _CAMEL_CASE_ROLES:
            if self._pattern_enabled("camelCase") and not CAMEL_CASE.match(name):
                problems.append(NamingProblem("casing", "should use camelCase", "camelCase"))

        lowered = name.lower()
        generic_words = self.config.options.get("generic_words", GENERIC_WORDS)
        abbreviations = self.config.options.get("abbreviations", ABBREVIATIONS)
        if lowered in generic_words:
            problems.append(
                NamingProblem("generic", "is a generic placeholder word; be more descriptive")
            )
        if lowered in abbreviations:
            problems.append(NamingProblem("abbreviation", "is an abbreviation; spell it out"))
        if LETTER_AND_DIGITS.match(name):
            problems.append(
                NamingProblem("numeric", "is only a letter and digits; be more descriptive")
            )
        if "__" in name:
            problems.append(NamingProblem("double_underscore", "contains consecutive underscores"))

        return problems

    def _issue(
        self,
        parsed_file: ParsedFile,
        node: SyntaxNode,
        identifier: str,
        role: str,
        problem: NamingProblem,
    ) -> Issue:
        location = self.create_location(parsed_file, node)
        return (
            IssueBuilder.create()
            .with_id(self.generate_issue_id())
            .with_category(Category.NAMING)
            .with_severity(problem.severity)
            .with_title(f'Poor {role} name: "{identifier}"')
            .with_description(f'{role.capitalize()} "{identifier}" {problem.message}.')
            .with_suggestion(self._suggestion(problem, role))
            .with_location(location)
            .with_code_snippet(self.extract_code_snippet(parsed_file, location))
            .with_rule("naming-convention")
            .build()
        )

    @staticmethod
    def _suggestion(problem: NamingProblem, role: str) -> str:
        if problem.convention:
            return _SUGGESTIONS[problem.convention]
        if problem.kind == "too_short":
            return f"Choose a descriptive name that states the purpose of the {role}."
        if problem.kind == "too_long":
            return f"Shorten the name while keeping it descriptive, or restructure the {role}."
        if problem.kind == "generic":
            return f"Use a specific name that says what the {role} holds or does."
        if problem.kind == "abbreviation":
            return 'Write abbreviations out in full (e.g. "button" instead of "btn").'
        return "Follow standard naming conventions for readability."
