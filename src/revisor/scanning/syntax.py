"""Syntax models consumed by the detectors.

SyntaxNode is a parser-neutral view of one node of a concrete syntax tree:
    - type: grammar node type (e.g. "function_declaration")
    - loc: 1-based line / 0-based column span
    - fields: named children (a node, a list of nodes) or scalar attributes
      such as an operator or a declaration kind
    - text: source text of leaf nodes (identifier names, literal values)
    - parent: back-reference to the enclosing node

Children are reachable only through ``fields``. Traversal never follows a
key in TRAVERSAL_EXCLUDED_FIELDS, which is what keeps walking a tree with
parent back-references finite.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

# Keys that hold back-references or position metadata, never children.
TRAVERSAL_EXCLUDED_FIELDS = frozenset(
    {"parent", "loc", "range", "leadingComments", "trailingComments"}
)

# Unnamed children (statements in a block, arguments, ...) live under this key.
CHILDREN_FIELD = "children"


@dataclass(frozen=True)
class Position:
    line: int  # 1-based
    column: int  # 0-based


@dataclass(frozen=True)
class SourceLocation:
    start: Position
    end: Position

    @property
    def line_span(self) -> int:
        """Number of source lines covered, inclusive."""
        return self.end.line - self.start.line + 1


@dataclass(eq=False)
class SyntaxNode:
    """A node of the parsed tree.

    Identity-compared: two structurally equal nodes at different places in
    the tree are different nodes.
    """

    type: str
    loc: Optional[SourceLocation] = None
    fields: dict[str, Any] = field(default_factory=dict)
    text: Optional[str] = None
    parent: Optional[SyntaxNode] = field(default=None, repr=False)

    def get(self, name: str) -> Any:
        """Return a named field value, or None if absent."""
        return self.fields.get(name)

    def add_field(self, name: str, value: Any) -> None:
        """Attach a value under ``name``; a repeated name collects into a list."""
        if name not in self.fields:
            self.fields[name] = value
            return
        existing = self.fields[name]
        if isinstance(existing, list):
            existing.append(value)
        else:
            self.fields[name] = [existing, value]

    def add_child(self, child: SyntaxNode, name: Optional[str] = None) -> None:
        """Attach ``child`` under a field (or the unnamed children list)."""
        child.parent = self
        if name is None:
            self.fields.setdefault(CHILDREN_FIELD, []).append(child)
        else:
            self.add_field(name, child)

    @property
    def children(self) -> list[SyntaxNode]:
        """Unnamed child nodes, in source order."""
        value = self.fields.get(CHILDREN_FIELD)
        return [c for c in value if isinstance(c, SyntaxNode)] if isinstance(value, list) else []

    @property
    def start_line(self) -> int:
        return self.loc.start.line if self.loc else 1

    @property
    def end_line(self) -> int:
        return self.loc.end.line if self.loc else self.start_line

    def name_text(self, field_name: str = "name") -> Optional[str]:
        """Text of a leaf stored under ``field_name`` (e.g. a declaration's name)."""
        value = self.fields.get(field_name)
        if isinstance(value, SyntaxNode):
            return value.text
        return None


@dataclass(frozen=True)
class ParsedFile:
    """A source file turned into a syntax tree.

    Attributes:
        path: Display path, relative to the analysis root
        content: Raw source text
        ast: Root node of the tree
        lines_of_code: Non-blank, non-comment line count
        language: Grammar the file was parsed with
    """

    path: str
    content: str
    ast: SyntaxNode
    lines_of_code: int
    language: str = "javascript"


def iter_child_nodes(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield the direct children of ``node`` in field order.

    Scalars and unknown values are skipped; excluded keys are never followed.
    """
    for key, value in node.fields.items():
        if key in TRAVERSAL_EXCLUDED_FIELDS:
            continue
        if isinstance(value, SyntaxNode):
            yield value
        elif isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, SyntaxNode):
                    yield item


def walk(
    root: SyntaxNode,
    prune: Optional[Callable[[SyntaxNode], bool]] = None,
) -> Iterator[SyntaxNode]:
    """Pre-order traversal of the tree under ``root`` (root included).

    Iterative so that deeply nested expressions cannot exhaust the
    interpreter's recursion limit. When ``prune`` returns True for a node,
    that node is yielded but its subtree is not entered.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if prune is not None and prune(node):
            continue
        stack.extend(reversed(list(iter_child_nodes(node))))


def count_lines_of_code(content: str) -> int:
    """Count lines that are neither blank nor pure line-comment / block markers."""
    count = 0
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("//"):
            continue
        if stripped in ("/*", "*/"):
            continue
        count += 1
    return count
