"""File discovery: expands include / exclude glob patterns under a root.

Patterns are matched against the POSIX path relative to the root, so
``node_modules/**`` and ``**/*.test.*`` behave the same at any depth.
"""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable

from .languages import is_supported


def _matches(rel_path: str, pattern: str) -> bool:
    if fnmatch.fnmatch(rel_path, pattern):
        return True
    # "**/x" also matches "x" at the root
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        if fnmatch.fnmatch(rel_path, pattern):
            return True
    return False


def matches_any(rel_path: str, patterns: Iterable[str]) -> bool:
    return any(_matches(rel_path, pattern) for pattern in patterns)


def discover_files(
    target: Path,
    include_patterns: Iterable[str],
    exclude_patterns: Iterable[str],
    language: str = "javascript",
) -> list[Path]:
    """List the files to analyze under ``target``, sorted by relative path.

    A single-file target is returned as-is when its extension is supported.
    """
    if target.is_file():
        return [target] if is_supported(target, language) else []

    include = list(include_patterns)
    exclude = list(exclude_patterns)
    files: list[Path] = []

    for path in target.rglob("*"):
        if not path.is_file():
            continue
        rel_path = path.relative_to(target).as_posix()
        if include and not matches_any(rel_path, include):
            continue
        if matches_any(rel_path, exclude):
            continue
        if not is_supported(path, language):
            continue
        files.append(path)

    return sorted(files, key=lambda p: p.relative_to(target).as_posix())
