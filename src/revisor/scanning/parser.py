"""SourceParser: produces ParsedFile records for the analysis engine.

Usage:
    parser = SourceParser()
    parsed = parser.parse_file(Path("src/app.js"), display_path="src/app.js")
    parsed = parser.parse_content("const a = 1;", "inline.js")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..exceptions import FileAccessError, ParsingError
from ..logging_config import get_logger
from .languages import detect_grammar
from .normalizer import TreeSitterNormalizer
from .syntax import ParsedFile, count_lines_of_code
from .treesitter_parser import TreeSitterParser

logger = get_logger(__name__)


class SourceParser:
    """Reads and parses JavaScript / TypeScript sources.

    Attributes:
        max_file_size: Files larger than this many bytes are refused
    """

    def __init__(self, max_file_size: Optional[int] = None) -> None:
        self._parser = TreeSitterParser()
        self._normalizer = TreeSitterNormalizer()
        self.max_file_size = max_file_size

    def parse_file(self, file_path: Path, display_path: Optional[str] = None) -> ParsedFile:
        """Read ``file_path`` from disk and parse it.

        Raises:
            FileAccessError: If the file cannot be read or is too large
            ParsingError: If the content does not parse cleanly
        """
        try:
            size = file_path.stat().st_size
        except OSError as e:
            raise FileAccessError(file_path, str(e))

        if self.max_file_size is not None and size > self.max_file_size:
            raise FileAccessError(
                file_path, f"file size {size} exceeds limit of {self.max_file_size} bytes"
            )

        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(file_path, str(e))

        return self.parse_content(content, display_path or str(file_path))

    def parse_content(self, content: str, path: str = "inline.js") -> ParsedFile:
        """Parse in-memory source; the grammar follows the extension of ``path``.

        Raises:
            ParsingError: If the grammar is unknown or the tree has syntax errors
        """
        grammar = detect_grammar(Path(path)) or "javascript"
        code_bytes = content.encode("utf-8")

        try:
            tree = self._parser.parse(code_bytes, grammar)
        except (KeyError, ValueError) as e:
            raise ParsingError(Path(path), grammar, str(e))

        if tree.root_node.has_error:
            raise ParsingError(Path(path), grammar, "syntax error in source")

        root = self._normalizer.convert(tree.root_node, code_bytes)
        logger.debug(f"Parsed {path} with {grammar} grammar")

        return ParsedFile(
            path=path,
            content=content,
            ast=root,
            lines_of_code=count_lines_of_code(content),
            language=grammar,
        )
