"""Tree-sitter parser wrapper.

Provides a unified interface for tree-sitter parsing across the JavaScript
family of grammars.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "javascript")
"""

from __future__ import annotations

from typing import Any, Callable

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

# Grammar name -> factory returning the raw language pointer.
_LANGUAGE_FACTORIES: dict[str, Callable[[], Any]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


class TreeSitterParser:
    """Wrapper around tree-sitter for multi-grammar parsing.

    ``tree_sitter.Language`` objects are immutable and shared; a fresh
    ``tree_sitter.Parser`` is created per call so the wrapper may be used
    from worker threads.
    """

    def __init__(self) -> None:
        """Load every available grammar."""
        self._languages: dict[str, tree_sitter.Language] = {
            name: tree_sitter.Language(factory())
            for name, factory in _LANGUAGE_FACTORIES.items()
        }

    def parse(self, code: bytes, language: str) -> tree_sitter.Tree:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: Grammar name (e.g., "javascript")

        Returns:
            Parsed tree (may contain ERROR nodes; check ``root_node.has_error``)

        Raises:
            KeyError: If the grammar is not supported
        """
        parser = tree_sitter.Parser(self._languages[language])
        return parser.parse(code)