"""Detector contract and the shared BaseDetector template.

Every detector is configured once with a DetectorConfig and exposes
``detect(parsed_file) -> list[Issue]``. ``BaseDetector.detect`` guarantees
two things for every subclass:

    - a disabled detector returns [] without touching the tree
    - an exception raised while detecting is logged and degrades to []
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Protocol, runtime_checkable
from uuid import uuid4

from ..config import DetectorConfig
from ..logging_config import get_logger
from ..models.issue import Issue, IssueLocation
from ..scanning.syntax import ParsedFile, SyntaxNode

logger = get_logger(__name__)


@runtime_checkable
class Detector(Protocol):
    """Anything that turns a parsed file into issues."""

    name: str
    stateful: bool

    def detect(self, parsed_file: ParsedFile) -> list[Issue]: ...


class BaseDetector(ABC):
    """Template for detectors.

    Subclasses set ``name`` and ``DEFAULT_THRESHOLDS`` and implement
    ``_detect``.
    """

    name: ClassVar[str] = "base"
    stateful: ClassVar[bool] = False
    DEFAULT_THRESHOLDS: ClassVar[dict[str, float]] = {}

    def __init__(self, config: Optional[DetectorConfig] = None):
        self.config = config or DetectorConfig(thresholds=dict(self.DEFAULT_THRESHOLDS))

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def detect(self, parsed_file: ParsedFile) -> list[Issue]:
        if not self.enabled:
            return []
        try:
            return self._detect(parsed_file)
        except Exception as e:
            logger.warning(f"{self.name} detector failed on {parsed_file.path}: {e}")
            return []

    @abstractmethod
    def _detect(self, parsed_file: ParsedFile) -> list[Issue]:
        """Find issues in one file. May raise; ``detect`` contains it."""

    def update_config(self, config: DetectorConfig) -> None:
        """Replace the configuration wholesale."""
        self.config = config

    def get_threshold(self, key: str) -> float:
        """Configured threshold, or the class default when missing or malformed."""
        value = self.config.thresholds.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            return self.DEFAULT_THRESHOLDS[key]
        return value

    def create_location(self, parsed_file: ParsedFile, node: SyntaxNode) -> IssueLocation:
        if node.loc is None:
            return IssueLocation(file=parsed_file.path, line=1, column=0)
        return IssueLocation(
            file=parsed_file.path,
            line=node.loc.start.line,
            column=node.loc.start.column,
            end_line=node.loc.end.line,
            end_column=node.loc.end.column,
        )

    def extract_code_snippet(self, parsed_file: ParsedFile, location: IssueLocation) -> str:
        """Source lines from one before ``location`` to one after its end.

        The anchor line is marked with an arrow:

              9: const total = items
            → 10: function computeTotal(items) {
             11:   let sum = 0;
        """
        lines = parsed_file.content.split("\n")
        first = max(0, location.line - 2)
        last = min(len(lines), (location.end_line or location.line) + 1)

        snippet = []
        for index in range(first, last):
            line_number = index + 1
            prefix = "→ " if line_number == location.line else "  "
            snippet.append(f"{prefix}{line_number:3}: {lines[index]}")
        return "\n".join(snippet)

    def generate_issue_id(self) -> str:
        return f"{self.name}_{uuid4().hex[:12]}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(enabled={self.enabled})"
