"""Language table: which files are analyzed and which grammar parses them."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the scanner needs to know about a language."""

    name: str
    extensions: tuple[str, ...]


# Both analysis languages accept the whole JavaScript family; the grammar is
# picked per file from its extension.
LANGUAGES: dict[str, LanguageConfig] = {
    "javascript": LanguageConfig(
        name="javascript",
        extensions=(".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"),
    ),
    "typescript": LanguageConfig(
        name="typescript",
        extensions=(".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"),
    ),
}

_GRAMMAR_BY_EXTENSION = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}


def get_supported_extensions(language: str = "javascript") -> tuple[str, ...]:
    config = LANGUAGES.get(language)
    return config.extensions if config else ()


def detect_grammar(path: Path) -> Optional[str]:
    """Grammar for a file, or None when the extension is not supported."""
    return _GRAMMAR_BY_EXTENSION.get(path.suffix.lower())


def is_supported(path: Path, language: str = "javascript") -> bool:
    return path.suffix.lower() in get_supported_extensions(language)
