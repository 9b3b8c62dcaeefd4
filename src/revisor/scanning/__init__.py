"""Scanning: file discovery, tree-sitter parsing and the syntax model."""

from .discovery import discover_files
from .languages import LANGUAGES, detect_grammar, get_supported_extensions
from .parser import SourceParser
from .syntax import (
    ParsedFile,
    Position,
    SourceLocation,
    SyntaxNode,
    TRAVERSAL_EXCLUDED_FIELDS,
    count_lines_of_code,
    iter_child_nodes,
    walk,
)

__all__ = [
    "LANGUAGES",
    "ParsedFile",
    "Position",
    "SourceLocation",
    "SourceParser",
    "SyntaxNode",
    "TRAVERSAL_EXCLUDED_FIELDS",
    "count_lines_of_code",
    "detect_grammar",
    "discover_files",
    "get_supported_extensions",
    "iter_child_nodes",
    "walk",
]
